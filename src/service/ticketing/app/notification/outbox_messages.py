from datetime import datetime
from typing import List, Union

from src.platform.config.core_setting import Settings
from src.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingConfirmedEvent,
    EventReminderDueEvent,
)
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.notification_type import EmailTemplate


def notification_messages_for(
    domain_event: Union[BookingConfirmedEvent, BookingCancelledEvent],
    *,
    settings: Settings,
    now: datetime,
) -> List[OutboxMessage]:
    """Email plus realtime notification enqueued alongside a booking state change"""
    template = (
        EmailTemplate.BOOKING_CONFIRMATION
        if isinstance(domain_event, BookingConfirmedEvent)
        else EmailTemplate.BOOKING_CANCELLATION
    )
    return [
        OutboxMessage.email(template=template, context=domain_event.email_context(), now=now),
        OutboxMessage.realtime(
            channel=settings.REALTIME_NOTIFICATION_CHANNEL,
            event=settings.REALTIME_NOTIFICATION_EVENT,
            data=domain_event.to_notification().to_payload(),
            now=now,
        ),
    ]


def reminder_message_for(domain_event: EventReminderDueEvent, *, now: datetime) -> OutboxMessage:
    return OutboxMessage.email(
        template=EmailTemplate.EVENT_REMINDER,
        context=domain_event.email_context(),
        dedupe_key=domain_event.dedupe_key,
        now=now,
    )
