from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.storefront_metrics import metrics
from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.ticketing.app.notification.outbox_messages import notification_messages_for
from src.service.ticketing.domain.domain_event.booking_domain_event import BookingConfirmedEvent
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.seat_entity import SeatEntity
from src.service.ticketing.domain.enum.booking_status import PaymentMethod
from src.service.ticketing.domain.value_object.money import PriceBreakdown
from src.service.ticketing.domain.value_object.session_context import SessionContext


class CreateBookingUseCase:
    """
    Create booking use case

    Flow:
    1. Load event and selected seats, reject invalid or taken selections early
    2. Price the seats (subtotal + booking fee) and build the confirmed booking
    3. Persist booking, booked seats, seat flips, counter decrement and the
       notification outbox messages in one conditional transaction
    4. Return the committed booking; notification delivery happens later

    Concurrency:
    - Two requests for the same seat both pass step 1, only one wins the
      conditional seat update in step 3, the other gets ConflictError
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        seat_query_repo: ISeatQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        settings: Settings,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.seat_query_repo = seat_query_repo
        self.booking_command_repo = booking_command_repo
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            seat_query_repo=seat_query_repo,
            booking_command_repo=booking_command_repo,
            settings=settings,
        )

    @Logger.io
    async def create_booking(
        self,
        *,
        session: SessionContext,
        event_id: int,
        seat_ids: List[int],
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str] = None,
        payment_method: PaymentMethod = PaymentMethod.CARD,
        now: Optional[datetime] = None,
    ) -> Booking:
        """
        Book ``seat_ids`` of ``event_id`` for the session user

        Raises:
            NotFoundError: event does not exist
            DomainError: empty/duplicate selection, foreign seat or inactive event
            ConflictError: a selected seat is (or just became) unavailable
        """
        now = now or datetime.now(timezone.utc)

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'event.id': event_id,
                'seat.count': len(seat_ids),
                'user.id': session.user_id,
            },
        ):
            try:
                booking = await self._create_booking(
                    session=session,
                    event_id=event_id,
                    seat_ids=seat_ids,
                    customer_name=customer_name,
                    customer_email=customer_email,
                    customer_phone=customer_phone,
                    payment_method=payment_method,
                    now=now,
                )
            except ConflictError:
                metrics.record_booking(result='conflict')
                raise
            except (DomainError, NotFoundError):
                metrics.record_booking(result='rejected')
                raise

            metrics.record_booking(
                result='confirmed', event_id=event_id, seats=booking.seat_count
            )
            return booking

    async def _create_booking(
        self,
        *,
        session: SessionContext,
        event_id: int,
        seat_ids: List[int],
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str],
        payment_method: PaymentMethod,
        now: datetime,
    ) -> Booking:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')

        if not seat_ids:
            raise DomainError('At least one seat must be selected')
        if len(set(seat_ids)) != len(seat_ids):
            raise DomainError('Duplicate seats in selection')

        seats = await self.seat_query_repo.list_by_ids(seat_ids=seat_ids)
        seats_in_selection_order = self._order_and_validate_seats(
            seats=seats, seat_ids=seat_ids, event_id=event_id
        )
        event.validate_bookable()

        price = PriceBreakdown.from_seat_prices(
            (seat.price for seat in seats_in_selection_order),
            fee_rate=self.settings.BOOKING_FEE_RATE,
        )
        booking = Booking.create(
            user_id=session.user_id,
            event_id=event_id,
            seat_ids=seat_ids,
            price=price,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            payment_method=payment_method,
            now=now,
        )

        confirmed_event = BookingConfirmedEvent.from_booking(
            booking=booking, event=event, occurred_at=now
        )
        booking = await self.booking_command_repo.create_booking_atomically(
            booking=booking,
            outbox_messages=notification_messages_for(
                confirmed_event, settings=self.settings, now=now
            ),
        )

        Logger.base.info(
            f'🎫 [BOOKING] Confirmed {booking.booking_reference} for user {session.user_id}: '
            f'{booking.seat_count} seats of event {event_id}, total ${booking.total_amount}'
        )
        return booking

    @staticmethod
    def _order_and_validate_seats(
        *, seats: List[SeatEntity], seat_ids: List[int], event_id: int
    ) -> List[SeatEntity]:
        seats_by_id = {seat.id: seat for seat in seats}
        ordered: List[SeatEntity] = []
        for seat_id in seat_ids:
            seat = seats_by_id.get(seat_id)
            if seat is None or seat.event_id != event_id:
                raise DomainError(f'Seat {seat_id} does not belong to this event')
            ordered.append(seat)

        taken = [seat.label for seat in ordered if not seat.available]
        if taken:
            raise ConflictError(f'Seats no longer available: {", ".join(taken)}')
        return ordered
