"""
Booking Command Repository Implementation

Booking and cancellation each run as a single transaction of conditional updates.
A conditional update that touches fewer rows than expected raises ``ConflictError``,
which rolls the whole transaction back.
"""

from typing import AsyncContextManager, Callable, List

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.driven_adapter.model.booking_model import (
    BookedSeatModel,
    BookingModel,
)
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.seat_model import SeatModel
from src.service.ticketing.driven_adapter.repo.outbox_repo_impl import (
    insert_outbox_messages_stmt,
)


SEATS_TAKEN_MESSAGE = 'One or more selected seats are no longer available'


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_model(booking: Booking) -> BookingModel:
        return BookingModel(
            id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            booking_reference=booking.booking_reference,
            subtotal=booking.subtotal,
            booking_fee=booking.booking_fee,
            total_amount=booking.total_amount,
            booking_status=booking.booking_status.value,
            payment_status=booking.payment_status.value,
            payment_method=booking.payment_method.value,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            seat_count=booking.seat_count,
            qr_code=booking.qr_code,
            refund_amount=booking.refund_amount,
            created_at=booking.created_at or func.now(),
            cancelled_at=booking.cancelled_at,
        )

    @Logger.io
    async def create_booking_atomically(
        self, *, booking: Booking, outbox_messages: List[OutboxMessage]
    ) -> Booking:
        seat_count = len(booking.seat_ids)

        async with self.session_factory() as session:
            async with session.begin():
                seats_result = await session.execute(
                    update(SeatModel)
                    .where(
                        SeatModel.id.in_(booking.seat_ids),
                        SeatModel.event_id == booking.event_id,
                        SeatModel.is_available == 1,
                    )
                    .values(is_available=0)
                    .execution_options(synchronize_session=False)
                )
                if seats_result.rowcount != seat_count:
                    Logger.base.warning(
                        f'⚔️ [BOOKING] Seat CAS lost for event {booking.event_id}: '
                        f'{seats_result.rowcount}/{seat_count} seats flipped'
                    )
                    raise ConflictError(SEATS_TAKEN_MESSAGE)

                event_result = await session.execute(
                    update(EventModel)
                    .where(
                        EventModel.id == booking.event_id,
                        EventModel.available_seats >= seat_count,
                    )
                    .values(available_seats=EventModel.available_seats - seat_count)
                    .execution_options(synchronize_session=False)
                )
                if event_result.rowcount != 1:
                    Logger.base.warning(
                        f'⚔️ [BOOKING] Counter CAS lost for event {booking.event_id}'
                    )
                    raise ConflictError(SEATS_TAKEN_MESSAGE)

                session.add(self._to_model(booking))
                await session.flush()
                session.add_all(
                    [
                        BookedSeatModel(booking_id=booking.id, seat_id=seat_id)
                        for seat_id in booking.seat_ids
                    ]
                )
                if outbox_messages:
                    await session.execute(insert_outbox_messages_stmt(outbox_messages))

        Logger.base.info(
            f'🎫 [BOOKING] Committed booking {booking.id} ({booking.booking_reference}) '
            f'with {seat_count} seat(s) for event {booking.event_id}'
        )
        return booking

    @Logger.io
    async def cancel_booking_atomically(
        self, *, booking: Booking, outbox_messages: List[OutboxMessage]
    ) -> Booking:
        async with self.session_factory() as session:
            async with session.begin():
                booking_result = await session.execute(
                    update(BookingModel)
                    .where(
                        BookingModel.id == booking.id,
                        BookingModel.booking_status != BookingStatus.CANCELLED.value,
                    )
                    .values(
                        booking_status=BookingStatus.CANCELLED.value,
                        cancelled_at=booking.cancelled_at,
                        refund_amount=booking.refund_amount,
                    )
                    .execution_options(synchronize_session=False)
                )
                if booking_result.rowcount != 1:
                    raise ConflictError('Booking was already cancelled')

                booked_seat_ids = select(BookedSeatModel.seat_id).where(
                    BookedSeatModel.booking_id == booking.id
                )
                await session.execute(
                    update(SeatModel)
                    .where(SeatModel.id.in_(booked_seat_ids))
                    .values(is_available=1)
                    .execution_options(synchronize_session=False)
                )

                event_result = await session.execute(
                    update(EventModel)
                    .where(
                        EventModel.id == booking.event_id,
                        EventModel.available_seats + booking.seat_count
                        <= EventModel.total_seats,
                    )
                    .values(available_seats=EventModel.available_seats + booking.seat_count)
                    .execution_options(synchronize_session=False)
                )
                if event_result.rowcount != 1:
                    Logger.base.warning(
                        f'⚠️ [CANCEL] Counter for event {booking.event_id} left unchanged, '
                        f'restoring {booking.seat_count} seat(s) would exceed total_seats'
                    )

                if outbox_messages:
                    await session.execute(insert_outbox_messages_stmt(outbox_messages))

        Logger.base.info(
            f'❌ [CANCEL] Cancelled booking {booking.id}, refund {booking.refund_amount}'
        )
        return booking
