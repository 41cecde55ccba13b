from datetime import datetime, timezone
from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.storefront_metrics import metrics
from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.notification.outbox_messages import notification_messages_for
from src.service.ticketing.domain.cancellation_domain import is_within_cancellation_window
from src.service.ticketing.domain.domain_event.booking_domain_event import BookingCancelledEvent
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.value_object.session_context import SessionContext


class CancelBookingUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        event_query_repo: IEventQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        settings: Settings,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.event_query_repo = event_query_repo
        self.booking_command_repo = booking_command_repo
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            event_query_repo=event_query_repo,
            booking_command_repo=booking_command_repo,
            settings=settings,
        )

    @Logger.io
    async def cancel_booking(
        self, *, session: SessionContext, booking_id: UUID, now: Optional[datetime] = None
    ) -> Booking:
        """
        Cancel a booking more than the cutoff before its event

        Releases every booked seat, restores the event counter and enqueues the
        cancellation email and realtime notification, all in one transaction.

        Raises:
            NotFoundError: booking or its event does not exist
            ForbiddenError: booking belongs to another user and session is not admin
            DomainError: already cancelled or the cancellation window has closed
            ConflictError: booking was cancelled concurrently
        """
        now = now or datetime.now(timezone.utc)

        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': session.user_id},
        ):
            try:
                booking = await self._cancel_booking(
                    session=session, booking_id=booking_id, now=now
                )
            except ConflictError:
                metrics.record_cancellation(result='conflict')
                raise
            except (DomainError, ForbiddenError, NotFoundError):
                metrics.record_cancellation(result='refused')
                raise

            metrics.record_cancellation(result='cancelled')
            return booking

    async def _cancel_booking(
        self, *, session: SessionContext, booking_id: UUID, now: datetime
    ) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if not session.can_access(booking.user_id):
            raise ForbiddenError('You can only cancel your own bookings')
        if booking.is_cancelled:
            raise DomainError('Booking already cancelled')

        event = await self.event_query_repo.get_by_id(event_id=booking.event_id)
        if not event:
            raise NotFoundError('Event not found')
        if not is_within_cancellation_window(
            event.event_date, now, cutoff_hours=self.settings.CANCELLATION_CUTOFF_HOURS
        ):
            raise DomainError('Cancellation window has closed')

        refund = booking.refund_quote(fee_rate=self.settings.CANCELLATION_FEE_RATE)
        cancelled = booking.cancel(refund=refund, now=now)
        cancelled_event = BookingCancelledEvent.from_booking(
            booking=cancelled,
            event=event,
            cancellation_fee=refund.cancellation_fee,
            occurred_at=now,
        )
        cancelled = await self.booking_command_repo.cancel_booking_atomically(
            booking=cancelled,
            outbox_messages=notification_messages_for(
                cancelled_event, settings=self.settings, now=now
            ),
        )

        Logger.base.info(
            f'❌ [CANCEL] Booking {cancelled.booking_reference} cancelled by {session.user_id}, '
            f'refund ${refund.refund_amount} (fee ${refund.cancellation_fee})'
        )
        return cancelled
