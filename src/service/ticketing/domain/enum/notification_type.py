"""
Notification Enums - Domain Value Objects

NotificationType values are the ``type`` field of real-time notifications shown
in the notification center; EmailTemplate values name the outbox email topics.
"""

from enum import StrEnum


class NotificationType(StrEnum):
    BOOKING_CONFIRMED = 'booking_confirmed'
    EVENT_REMINDER = 'event_reminder'
    BOOKING_CANCELLED = 'booking_cancelled'
    SYSTEM_UPDATE = 'system_update'
    PROMOTION = 'promotion'


class EmailTemplate(StrEnum):
    BOOKING_CONFIRMATION = 'booking_confirmation'
    EVENT_REMINDER = 'event_reminder'
    BOOKING_CANCELLATION = 'booking_cancellation'
    WELCOME = 'welcome'


class ReminderType(StrEnum):
    DAY_BEFORE = 'day_before'
    HOUR_BEFORE = 'hour_before'
