"""
Unit tests for DispatchOutboxUseCase

Every claimed message is delivered independently: a failing email never blocks
the realtime message claimed in the same batch, and failures only touch the
failing message's retry bookkeeping.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from src.service.ticketing.app.command.dispatch_outbox_use_case import DispatchOutboxUseCase
from src.service.ticketing.app.notification.email_templates import (
    EmailTemplateRenderer,
    MailIdentity,
)
from src.service.ticketing.app.notification.outbox_messages import reminder_message_for
from src.service.ticketing.domain.domain_event.booking_domain_event import EventReminderDueEvent
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.domain.enum.notification_type import EmailTemplate, ReminderType
from src.service.ticketing.domain.enum.outbox_status import OutboxStatus
from src.service.ticketing.driven_adapter.notification.mock_email_sender_impl import (
    MockEmailSenderImpl,
)
from test.service.ticketing.unit.helpers import NOW, make_booking, make_event


def _welcome(email: str = 'buyer@example.com') -> OutboxMessage:
    return OutboxMessage.email(
        template=EmailTemplate.WELCOME,
        context={'user_email': email, 'user_name': 'Alex'},
        now=NOW,
    )


def _notification() -> OutboxMessage:
    return OutboxMessage.realtime(
        channel='user-notifications',
        event='new_notification',
        data={'userId': 'user-1', 'type': 'booking_confirmed'},
        now=NOW,
    )


def _reminder(booking: Booking) -> OutboxMessage:
    due = EventReminderDueEvent.from_booking(
        booking=booking,
        event=make_event(id=booking.event_id),
        reminder_type=ReminderType.DAY_BEFORE,
        occurred_at=NOW,
    )
    return reminder_message_for(due, now=NOW)


@pytest.fixture
def outbox_repo() -> Mock:
    repo = AsyncMock()
    repo.save_result = AsyncMock()
    return repo


@pytest.fixture
def booking_query_repo() -> Mock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def realtime_publisher() -> Mock:
    publisher = AsyncMock()
    publisher.publish = AsyncMock(return_value=1)
    return publisher


@pytest.fixture
def email_sender() -> MockEmailSenderImpl:
    return MockEmailSenderImpl(debug=False)


@pytest.fixture
def use_case(
    outbox_repo, booking_query_repo, realtime_publisher, email_sender, settings
) -> DispatchOutboxUseCase:
    return DispatchOutboxUseCase(
        outbox_repo=outbox_repo,
        booking_query_repo=booking_query_repo,
        email_sender=email_sender,
        realtime_publisher=realtime_publisher,
        email_renderer=EmailTemplateRenderer(identity=MailIdentity.from_settings(settings)),
        settings=settings,
    )


def _saved(outbox_repo: Mock) -> list[OutboxMessage]:
    return [call.kwargs['message'] for call in outbox_repo.save_result.await_args_list]


@pytest.mark.unit
class TestDispatchOutboxUseCase:
    async def test_nothing_due(self, use_case: DispatchOutboxUseCase, outbox_repo: Mock) -> None:
        outbox_repo.claim_due = AsyncMock(return_value=[])

        result = await use_case.dispatch_due(now=NOW)

        assert result.claimed == 0
        outbox_repo.save_result.assert_not_awaited()

    async def test_delivers_email_and_realtime(
        self,
        use_case: DispatchOutboxUseCase,
        outbox_repo: Mock,
        email_sender: MockEmailSenderImpl,
        realtime_publisher: Mock,
    ) -> None:
        outbox_repo.claim_due = AsyncMock(return_value=[_welcome(), _notification()])

        result = await use_case.dispatch_due(now=NOW)

        assert (result.delivered, result.retried, result.dead) == (2, 0, 0)
        assert len(email_sender.sent_emails) == 1
        assert email_sender.sent_emails[0]['message'].to == 'buyer@example.com'
        realtime_publisher.publish.assert_awaited_once_with(
            channel='user-notifications',
            event='new_notification',
            data={'userId': 'user-1', 'type': 'booking_confirmed'},
        )
        assert [m.status for m in _saved(outbox_repo)] == [OutboxStatus.DELIVERED] * 2

    async def test_failed_email_does_not_block_realtime(
        self, use_case: DispatchOutboxUseCase, outbox_repo: Mock, realtime_publisher: Mock
    ) -> None:
        """
        Given: A claimed batch with an email whose sender fails and a realtime message
        When: Dispatching the batch
        Then: The email is scheduled for retry and the realtime message is still delivered
        """
        use_case.email_sender = AsyncMock()
        use_case.email_sender.send = AsyncMock(side_effect=ConnectionError('smtp down'))
        outbox_repo.claim_due = AsyncMock(return_value=[_welcome(), _notification()])

        result = await use_case.dispatch_due(now=NOW)

        assert (result.delivered, result.retried, result.dead) == (1, 1, 0)
        failed, delivered = _saved(outbox_repo)
        assert failed.status == OutboxStatus.PENDING
        assert failed.attempts == 1
        assert failed.last_error == 'ConnectionError: smtp down'
        assert failed.next_attempt_at == NOW + timedelta(seconds=5)
        assert delivered.status == OutboxStatus.DELIVERED
        realtime_publisher.publish.assert_awaited_once()

    async def test_malformed_payload_goes_dead_after_max_attempts(
        self, use_case: DispatchOutboxUseCase, outbox_repo: Mock, settings
    ) -> None:
        broken = _welcome(email='not-an-email')
        broken.attempts = settings.OUTBOX_MAX_ATTEMPTS - 1
        outbox_repo.claim_due = AsyncMock(return_value=[broken])

        result = await use_case.dispatch_due(now=NOW)

        assert result.dead == 1
        (saved,) = _saved(outbox_repo)
        assert saved.status == OutboxStatus.DEAD
        assert 'Invalid welcome email payload' in (saved.last_error or '')

    async def test_claim_uses_settings(
        self, use_case: DispatchOutboxUseCase, outbox_repo: Mock, settings
    ) -> None:
        outbox_repo.claim_due = AsyncMock(return_value=[])

        await use_case.dispatch_due(now=NOW, batch_size=7)

        outbox_repo.claim_due.assert_awaited_once_with(
            now=NOW, limit=7, lease_seconds=settings.OUTBOX_CLAIM_LEASE_SECONDS
        )

    async def test_reminder_for_confirmed_booking_is_sent(
        self,
        use_case: DispatchOutboxUseCase,
        outbox_repo: Mock,
        booking_query_repo: Mock,
        email_sender: MockEmailSenderImpl,
    ) -> None:
        booking = make_booking()
        booking_query_repo.get_by_id = AsyncMock(return_value=booking)
        outbox_repo.claim_due = AsyncMock(return_value=[_reminder(booking)])

        result = await use_case.dispatch_due(now=NOW)

        assert result.delivered == 1
        assert len(email_sender.sent_emails) == 1
        booking_query_repo.get_by_id.assert_awaited_once_with(booking_id=booking.id)

    async def test_reminder_for_cancelled_booking_is_skipped(
        self,
        use_case: DispatchOutboxUseCase,
        outbox_repo: Mock,
        booking_query_repo: Mock,
        email_sender: MockEmailSenderImpl,
    ) -> None:
        """
        Given: A reminder enqueued before its booking was cancelled
        When: Dispatching the batch
        Then: The reminder is marked delivered and no email is sent
        """
        booking = make_booking()
        outbox_repo.claim_due = AsyncMock(return_value=[_reminder(booking)])
        booking_query_repo.get_by_id = AsyncMock(
            return_value=make_booking(booking_status=BookingStatus.CANCELLED)
        )

        result = await use_case.dispatch_due(now=NOW)

        assert result.delivered == 1
        assert email_sender.sent_emails == []
        (saved,) = _saved(outbox_repo)
        assert saved.status == OutboxStatus.DELIVERED

    async def test_non_reminder_email_skips_booking_lookup(
        self, use_case: DispatchOutboxUseCase, outbox_repo: Mock, booking_query_repo: Mock
    ) -> None:
        outbox_repo.claim_due = AsyncMock(return_value=[_welcome()])

        await use_case.dispatch_due(now=NOW)

        booking_query_repo.get_by_id.assert_not_awaited()
