"""Unit tests for CancelBookingUseCase"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.domain.enum.notification_type import EmailTemplate
from test.service.ticketing.unit.helpers import NOW, RepositoryMocks, make_booking, make_event


def _use_case(mocks: RepositoryMocks, settings) -> CancelBookingUseCase:
    return CancelBookingUseCase(
        booking_query_repo=mocks.booking_query_repo,
        event_query_repo=mocks.event_query_repo,
        booking_command_repo=mocks.booking_command_repo,
        settings=settings,
    )


@pytest.mark.unit
class TestCancelBookingUseCase:
    async def test_cancel_more_than_24_hours_before(self, settings, customer_session) -> None:
        """
        Given: A $52.50 booking for an event 48 hours away
        When: The owner cancels it
        Then: It is cancelled with a $47.25 refund, and the email carries the $5.25 fee
        """
        booking = make_booking(total_amount=Decimal('52.50'))
        mocks = RepositoryMocks(
            events=[make_event(id=1, event_date=NOW + timedelta(hours=48))], bookings=[booking]
        )

        cancelled = await _use_case(mocks, settings).cancel_booking(
            session=customer_session, booking_id=booking.id, now=NOW
        )

        assert cancelled.booking_status == BookingStatus.CANCELLED
        assert cancelled.refund_amount == Decimal('47.25')
        assert cancelled.cancelled_at == NOW

        call = mocks.booking_command_repo.cancel_booking_atomically.call_args
        email, realtime = call.kwargs['outbox_messages']
        assert email.topic == EmailTemplate.BOOKING_CANCELLATION.value
        assert email.payload['refund_amount'] == '47.25'
        assert email.payload['cancellation_fee'] == '5.25'
        assert realtime.payload['data']['type'] == 'booking_cancelled'

    async def test_exactly_24_hours_before_is_refused(self, settings, customer_session) -> None:
        """
        Given: An event exactly 24 hours away
        When: The owner tries to cancel
        Then: The window is closed and nothing is written
        """
        booking = make_booking()
        mocks = RepositoryMocks(
            events=[make_event(id=1, event_date=NOW + timedelta(hours=24))], bookings=[booking]
        )

        with pytest.raises(DomainError, match='Cancellation window has closed'):
            await _use_case(mocks, settings).cancel_booking(
                session=customer_session, booking_id=booking.id, now=NOW
            )

        mocks.booking_command_repo.cancel_booking_atomically.assert_not_awaited()

    async def test_other_users_booking_is_forbidden(
        self, settings, other_customer_session
    ) -> None:
        booking = make_booking(user_id='user-1')
        mocks = RepositoryMocks(events=[make_event(id=1)], bookings=[booking])

        with pytest.raises(ForbiddenError):
            await _use_case(mocks, settings).cancel_booking(
                session=other_customer_session, booking_id=booking.id, now=NOW
            )

    async def test_admin_can_cancel_any_booking(self, settings, admin_session) -> None:
        booking = make_booking(user_id='user-1')
        mocks = RepositoryMocks(events=[make_event(id=1)], bookings=[booking])

        cancelled = await _use_case(mocks, settings).cancel_booking(
            session=admin_session, booking_id=booking.id, now=NOW
        )

        assert cancelled.is_cancelled

    async def test_already_cancelled(self, settings, customer_session) -> None:
        booking = make_booking(booking_status=BookingStatus.CANCELLED)
        mocks = RepositoryMocks(events=[make_event(id=1)], bookings=[booking])

        with pytest.raises(DomainError, match='already cancelled'):
            await _use_case(mocks, settings).cancel_booking(
                session=customer_session, booking_id=booking.id, now=NOW
            )

    async def test_unknown_booking(self, settings, customer_session) -> None:
        mocks = RepositoryMocks(events=[make_event(id=1)])

        with pytest.raises(NotFoundError, match='Booking not found'):
            await _use_case(mocks, settings).cancel_booking(
                session=customer_session, booking_id=uuid7(), now=NOW
            )

    async def test_concurrent_cancel_is_a_conflict(self, settings, customer_session) -> None:
        booking = make_booking()
        mocks = RepositoryMocks(events=[make_event(id=1)], bookings=[booking])
        mocks.booking_command_repo.cancel_booking_atomically = AsyncMock(
            side_effect=ConflictError('Booking was already cancelled')
        )

        with pytest.raises(ConflictError):
            await _use_case(mocks, settings).cancel_booking(
                session=customer_session, booking_id=booking.id, now=NOW
            )
