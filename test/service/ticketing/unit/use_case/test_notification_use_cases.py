"""Unit tests for EnqueueEventRemindersUseCase and SendWelcomeEmailUseCase"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.service.ticketing.app.command.enqueue_event_reminders_use_case import (
    EnqueueEventRemindersUseCase,
)
from src.service.ticketing.app.command.send_welcome_email_use_case import SendWelcomeEmailUseCase
from src.service.ticketing.domain.enum.notification_type import EmailTemplate, ReminderType
from test.service.ticketing.unit.helpers import NOW, RepositoryMocks, make_booking, make_event


def _reminder_use_case(mocks: RepositoryMocks) -> EnqueueEventRemindersUseCase:
    return EnqueueEventRemindersUseCase(
        booking_query_repo=mocks.booking_query_repo,
        event_query_repo=mocks.event_query_repo,
        outbox_repo=mocks.outbox_repo,
    )


@pytest.mark.unit
class TestEnqueueEventReminders:
    async def test_day_before_window(self) -> None:
        """
        Given: A confirmed booking for an event starting tomorrow
        When: Scanning for day-before reminders
        Then: One reminder email is enqueued with a per-booking dedupe key
        """
        booking = make_booking(event_id=1)
        mocks = RepositoryMocks(
            events=[make_event(id=1, event_date=NOW + timedelta(hours=24))], bookings=[booking]
        )

        enqueued = await _reminder_use_case(mocks).enqueue_reminders(
            reminder_type=ReminderType.DAY_BEFORE, now=NOW
        )

        assert enqueued == 1
        list_in_window = mocks.booking_query_repo.list_confirmed_for_events_starting_between
        list_in_window.assert_awaited_once_with(
            start_after=NOW + timedelta(hours=23), start_until=NOW + timedelta(hours=25)
        )
        (message,) = mocks.outbox_repo.enqueue.call_args.kwargs['messages']
        assert message.topic == EmailTemplate.EVENT_REMINDER.value
        assert message.dedupe_key == f'reminder:{booking.id}:day_before'
        assert message.payload['reminder_type'] == 'day_before'

    async def test_rescan_reports_only_new_reminders(self) -> None:
        mocks = RepositoryMocks(events=[make_event(id=1)], bookings=[make_booking(event_id=1)])
        mocks.outbox_repo.enqueue = AsyncMock(return_value=0)

        enqueued = await _reminder_use_case(mocks).enqueue_reminders(
            reminder_type=ReminderType.HOUR_BEFORE, now=NOW
        )

        assert enqueued == 0

    async def test_booking_with_missing_event_is_skipped(self) -> None:
        mocks = RepositoryMocks(events=[], bookings=[make_booking(event_id=7)])

        enqueued = await _reminder_use_case(mocks).enqueue_reminders(
            reminder_type=ReminderType.DAY_BEFORE, now=NOW
        )

        assert enqueued == 0
        assert mocks.outbox_repo.enqueue.call_args.kwargs['messages'] == []

    async def test_no_bookings_in_window(self) -> None:
        mocks = RepositoryMocks()

        counts = await _reminder_use_case(mocks).enqueue_all(now=NOW)

        assert counts == {ReminderType.DAY_BEFORE: 0, ReminderType.HOUR_BEFORE: 0}
        mocks.outbox_repo.enqueue.assert_not_awaited()


@pytest.mark.unit
class TestSendWelcomeEmail:
    async def test_welcome_is_deduplicated_per_user(self, customer_session) -> None:
        mocks = RepositoryMocks()
        use_case = SendWelcomeEmailUseCase(outbox_repo=mocks.outbox_repo)

        enqueued = await use_case.send_welcome(session=customer_session, now=NOW)

        assert enqueued is True
        (message,) = mocks.outbox_repo.enqueue.call_args.kwargs['messages']
        assert message.topic == EmailTemplate.WELCOME.value
        assert message.dedupe_key == 'welcome:user-1'
        assert message.payload == {'user_email': 'buyer@example.com', 'user_name': 'Alex Rivera'}

    async def test_second_welcome_is_not_enqueued(self, customer_session) -> None:
        mocks = RepositoryMocks()
        mocks.outbox_repo.enqueue = AsyncMock(return_value=0)
        use_case = SendWelcomeEmailUseCase(outbox_repo=mocks.outbox_repo)

        assert await use_case.send_welcome(session=customer_session, now=NOW) is False
