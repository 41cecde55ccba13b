from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_outbox_repo import IOutboxRepo
from src.service.ticketing.app.notification.outbox_messages import reminder_message_for
from src.service.ticketing.domain.domain_event.booking_domain_event import EventReminderDueEvent
from src.service.ticketing.domain.enum.notification_type import ReminderType


# (lower, upper] offsets from now of the event start
REMINDER_WINDOWS: Dict[ReminderType, Tuple[timedelta, timedelta]] = {
    ReminderType.DAY_BEFORE: (timedelta(hours=23), timedelta(hours=25)),
    ReminderType.HOUR_BEFORE: (timedelta(minutes=30), timedelta(minutes=90)),
}


class EnqueueEventRemindersUseCase:
    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        event_query_repo: IEventQueryRepo,
        outbox_repo: IOutboxRepo,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.event_query_repo = event_query_repo
        self.outbox_repo = outbox_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        outbox_repo: IOutboxRepo = Depends(Provide[Container.outbox_repo]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            event_query_repo=event_query_repo,
            outbox_repo=outbox_repo,
        )

    @Logger.io
    async def enqueue_reminders(
        self, *, reminder_type: ReminderType, now: Optional[datetime] = None
    ) -> int:
        """
        Enqueue one reminder email per confirmed booking whose event is in the window

        Returns:
            Number of reminders newly enqueued; already enqueued pairs are skipped
        """
        now = now or datetime.now(timezone.utc)
        lower, upper = REMINDER_WINDOWS[reminder_type]

        bookings = await self.booking_query_repo.list_confirmed_for_events_starting_between(
            start_after=now + lower, start_until=now + upper
        )
        if not bookings:
            return 0

        events = await self.event_query_repo.list_by_ids(
            event_ids={booking.event_id for booking in bookings}
        )
        events_by_id = {event.id: event for event in events}

        messages = []
        for booking in bookings:
            event = events_by_id.get(booking.event_id)
            if event is None:
                Logger.base.warning(
                    f'⚠️ [REMINDER] Event {booking.event_id} missing for booking {booking.id}'
                )
                continue
            due = EventReminderDueEvent.from_booking(
                booking=booking, event=event, reminder_type=reminder_type, occurred_at=now
            )
            messages.append(reminder_message_for(due, now=now))

        enqueued = await self.outbox_repo.enqueue(messages=messages)
        Logger.base.info(
            f'⏰ [REMINDER] {reminder_type.value}: {enqueued} enqueued '
            f'({len(messages) - enqueued} already scheduled)'
        )
        return enqueued

    @Logger.io
    async def enqueue_all(self, *, now: Optional[datetime] = None) -> Dict[ReminderType, int]:
        now = now or datetime.now(timezone.utc)
        return {
            reminder_type: await self.enqueue_reminders(reminder_type=reminder_type, now=now)
            for reminder_type in REMINDER_WINDOWS
        }
