"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.enum.event_status import EventCategory, EventStatus
from src.service.ticketing.domain.enum.notification_type import (
    EmailTemplate,
    NotificationType,
    ReminderType,
)
from src.service.ticketing.domain.enum.outbox_status import OutboxKind, OutboxStatus
from src.service.ticketing.domain.enum.seat_type import SeatType
from src.service.ticketing.domain.enum.user_role import UserRole

__all__ = [
    'BookingStatus',
    'EmailTemplate',
    'EventCategory',
    'EventStatus',
    'NotificationType',
    'OutboxKind',
    'OutboxStatus',
    'PaymentMethod',
    'PaymentStatus',
    'ReminderType',
    'SeatType',
    'UserRole',
]
