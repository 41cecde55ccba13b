"""
Booking persistence against PostgreSQL

Exercises the conditional updates in BookingCommandRepoImpl and the reminder
dedupe index with real transactions.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.platform.database.orm_db_setting import Database
from src.platform.exception.exceptions import ConflictError
from src.service.ticketing.app.command.enqueue_event_reminders_use_case import (
    EnqueueEventRemindersUseCase,
)
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.domain.enum.notification_type import EmailTemplate, ReminderType
from src.service.ticketing.domain.value_object.money import RefundQuote
from src.service.ticketing.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.outbox_repo_impl import OutboxRepoImpl
from test.service.ticketing.integration.helpers import (
    available_seats_of,
    count_bookings,
    count_outbox_messages,
    seat_flags,
    seed_event,
)
from test.service.ticketing.unit.helpers import NOW, make_booking


def _booking_created(booking_id: str) -> OutboxMessage:
    return OutboxMessage.realtime(
        channel='admin', event='booking_created', data={'booking_id': booking_id}, now=NOW
    )


@pytest.mark.integration
class TestCreateBookingAtomically:
    @pytest.fixture
    def repo(self, database: Database) -> BookingCommandRepoImpl:
        return BookingCommandRepoImpl(session_factory=database.session)

    async def test_lost_seat_race_rolls_back_everything(
        self, database: Database, repo: BookingCommandRepoImpl
    ) -> None:
        # Given: Seat 2 is taken by a committed booking
        event_id, seat_ids = await seed_event(database, seat_count=4)
        first = make_booking(
            event_id=event_id, seat_ids=seat_ids[0:2], booking_reference='BK00000001AAAA'
        )
        await repo.create_booking_atomically(
            booking=first, outbox_messages=[_booking_created(str(first.id))]
        )

        # When: A second booking overlaps on seat 2 and also asks for seat 3
        second = make_booking(
            event_id=event_id, seat_ids=seat_ids[1:3], booking_reference='BK00000002BBBB'
        )
        with pytest.raises(ConflictError):
            await repo.create_booking_atomically(
                booking=second, outbox_messages=[_booking_created(str(second.id))]
            )

        # Then: Nothing of the second booking survives
        assert await count_bookings(database) == 1
        assert await count_outbox_messages(database) == 1
        assert await seat_flags(database, seat_ids=seat_ids) == {
            seat_ids[0]: 0,
            seat_ids[1]: 0,
            seat_ids[2]: 1,
            seat_ids[3]: 1,
        }
        assert await available_seats_of(database, event_id=event_id) == 2

    async def test_seats_of_another_event_are_rejected(
        self, database: Database, repo: BookingCommandRepoImpl
    ) -> None:
        event_id, _ = await seed_event(database, seat_count=2)
        _, foreign_seat_ids = await seed_event(database, seat_count=2)
        booking = make_booking(event_id=event_id, seat_ids=foreign_seat_ids)

        with pytest.raises(ConflictError):
            await repo.create_booking_atomically(booking=booking, outbox_messages=[])

        assert await count_bookings(database) == 0
        assert await seat_flags(database, seat_ids=foreign_seat_ids) == {
            foreign_seat_ids[0]: 1,
            foreign_seat_ids[1]: 1,
        }


@pytest.mark.integration
class TestCancelBookingAtomically:
    async def test_cancel_restores_seats_and_counter(self, database: Database) -> None:
        # Given: A committed booking for two of three seats
        command_repo = BookingCommandRepoImpl(session_factory=database.session)
        query_repo = BookingQueryRepoImpl(session_factory=database.session)
        event_id, seat_ids = await seed_event(database, seat_count=3)
        booking = make_booking(event_id=event_id, seat_ids=seat_ids[:2])
        await command_repo.create_booking_atomically(booking=booking, outbox_messages=[])
        assert await available_seats_of(database, event_id=event_id) == 1

        # When: The booking is cancelled
        refund = RefundQuote.from_total(booking.total_amount, fee_rate=Decimal('0.10'))
        cancelled = booking.cancel(refund=refund, now=NOW)
        await command_repo.cancel_booking_atomically(booking=cancelled, outbox_messages=[])

        # Then: Seats and counter are back, and the stored booking is cancelled
        assert await available_seats_of(database, event_id=event_id) == 3
        assert set((await seat_flags(database, seat_ids=seat_ids)).values()) == {1}

        stored = await query_repo.get_by_id(booking_id=booking.id)
        assert stored is not None
        assert stored.booking_status == BookingStatus.CANCELLED
        assert stored.refund_amount == Decimal('47.25')
        assert sorted(stored.seat_ids) == sorted(seat_ids[:2])

    async def test_second_cancel_conflicts_and_leaves_counter(self, database: Database) -> None:
        command_repo = BookingCommandRepoImpl(session_factory=database.session)
        event_id, seat_ids = await seed_event(database, seat_count=2)
        booking = make_booking(event_id=event_id, seat_ids=seat_ids)
        await command_repo.create_booking_atomically(booking=booking, outbox_messages=[])
        refund = RefundQuote.from_total(booking.total_amount, fee_rate=Decimal('0.10'))
        cancelled = booking.cancel(refund=refund, now=NOW)
        await command_repo.cancel_booking_atomically(booking=cancelled, outbox_messages=[])

        with pytest.raises(ConflictError):
            await command_repo.cancel_booking_atomically(booking=cancelled, outbox_messages=[])

        assert await available_seats_of(database, event_id=event_id) == 2


@pytest.mark.integration
class TestReminderRescan:
    async def test_rescan_does_not_enqueue_duplicates(self, database: Database) -> None:
        """
        Given: A confirmed booking for an event starting in 24 hours
        When: The day-before scan runs twice
        Then: Only the first scan enqueues a reminder
        """
        now = datetime.now(timezone.utc)
        event_id, seat_ids = await seed_event(
            database, seat_count=2, event_date=now + timedelta(hours=24)
        )
        booking = make_booking(event_id=event_id, seat_ids=seat_ids[:1])
        await BookingCommandRepoImpl(session_factory=database.session).create_booking_atomically(
            booking=booking, outbox_messages=[]
        )
        use_case = EnqueueEventRemindersUseCase(
            booking_query_repo=BookingQueryRepoImpl(session_factory=database.session),
            event_query_repo=EventQueryRepoImpl(session_factory=database.session),
            outbox_repo=OutboxRepoImpl(session_factory=database.session),
        )

        first_scan = await use_case.enqueue_reminders(
            reminder_type=ReminderType.DAY_BEFORE, now=now
        )
        second_scan = await use_case.enqueue_reminders(
            reminder_type=ReminderType.DAY_BEFORE, now=now + timedelta(minutes=5)
        )

        assert first_scan == 1
        assert second_scan == 0
        topic = EmailTemplate.EVENT_REMINDER.value
        assert await count_outbox_messages(database, topic=topic) == 1
