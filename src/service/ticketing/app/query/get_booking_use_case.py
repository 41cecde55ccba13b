from datetime import datetime, timezone
from typing import Optional, Self, Tuple
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.storefront_dto import BookingDetail, CancellationQuote
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.ticketing.app.notification.email_templates import format_short_date
from src.service.ticketing.domain.cancellation_domain import (
    hours_until,
    is_within_cancellation_window,
    time_until_event_label,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.domain.value_object.ticket_qr import build_ticket_qr_payload


class GetBookingUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        event_query_repo: IEventQueryRepo,
        seat_query_repo: ISeatQueryRepo,
        settings: Settings,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.event_query_repo = event_query_repo
        self.seat_query_repo = seat_query_repo
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            event_query_repo=event_query_repo,
            seat_query_repo=seat_query_repo,
            settings=settings,
        )

    async def _get_owned_booking(self, *, session: SessionContext, booking_id: UUID) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if not session.can_access(booking.user_id):
            raise ForbiddenError('You can only access your own bookings')
        return booking

    @Logger.io
    async def get_booking_detail(
        self, *, session: SessionContext, booking_id: UUID
    ) -> BookingDetail:
        booking = await self._get_owned_booking(session=session, booking_id=booking_id)
        event = await self.event_query_repo.get_by_id(event_id=booking.event_id)
        seats = await self.seat_query_repo.list_by_booking(booking_id=booking.id)
        return BookingDetail(booking=booking, event=event, seats=seats)

    @Logger.io
    async def get_cancellation_quote(
        self, *, session: SessionContext, booking_id: UUID, now: Optional[datetime] = None
    ) -> CancellationQuote:
        """Refund the booking would get if cancelled at ``now``; nothing is written"""
        now = now or datetime.now(timezone.utc)
        booking = await self._get_owned_booking(session=session, booking_id=booking_id)
        event = await self.event_query_repo.get_by_id(event_id=booking.event_id)
        if not event:
            raise NotFoundError('Event not found')

        refund = booking.refund_quote(fee_rate=self.settings.CANCELLATION_FEE_RATE)
        in_window = is_within_cancellation_window(
            event.event_date, now, cutoff_hours=self.settings.CANCELLATION_CUTOFF_HOURS
        )

        reason = None
        if booking.is_cancelled:
            reason = 'Booking already cancelled'
        elif not in_window:
            reason = (
                f'Bookings can only be cancelled more than '
                f'{self.settings.CANCELLATION_CUTOFF_HOURS} hours before the event'
            )

        return CancellationQuote(
            booking_id=str(booking.id),
            can_cancel=reason is None,
            hours_until_event=round(hours_until(event.event_date, now), 2),
            time_label=time_until_event_label(event.event_date, now),
            total_amount=refund.total_amount,
            cancellation_fee=refund.cancellation_fee,
            refund_amount=refund.refund_amount,
            reason=reason,
        )

    @Logger.io
    async def download_ticket(
        self, *, session: SessionContext, booking_id: UUID
    ) -> Tuple[str, str]:
        """
        Plain-text ticket for a booking

        Returns:
            (filename, content)
        """
        detail = await self.get_booking_detail(session=session, booking_id=booking_id)
        booking, event = detail.booking, detail.event
        if not event:
            raise NotFoundError('Event not found')

        seat_labels = ', '.join(seat.label for seat in detail.seats) or f'{booking.seat_count}'
        qr_payload = build_ticket_qr_payload(
            booking_id=str(booking.id),
            event_id=booking.event_id,
            seat_count=booking.seat_count,
            customer_email=booking.customer_email,
            include_reference=False,
        )
        booked_on = format_short_date(booking.created_at) if booking.created_at else '-'
        lines = [
            'DIGITAL TICKET',
            '==============',
            '',
            f'Event: {event.title}',
            f'Date: {format_short_date(event.event_date)}',
            f'Time: {event.event_time}',
            f'Venue: {event.venue_name}',
            '',
            f'Booking ID: {booking.id}',
            f'Reference: {booking.display_reference}',
            f'Customer: {booking.customer_name}',
            f'Email: {booking.customer_email}',
            f'Seats: {booking.seat_count} ({seat_labels})',
            f'Total Amount: ${booking.total_amount:.2f}',
            f'Status: {booking.booking_status.value}',
            '',
            f'Booking Date: {booked_on}',
            '',
            f'QR: {qr_payload}',
            '',
            'Please present this ticket at the venue.',
        ]
        return f'ticket-{booking.id}.txt', '\n'.join(lines) + '\n'
