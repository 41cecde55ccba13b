"""Domain Events"""

from src.service.ticketing.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingConfirmedEvent,
    BookingSnapshot,
    EventReminderDueEvent,
)
from src.service.ticketing.domain.domain_event.domain_event import DomainEvent

__all__ = [
    'BookingCancelledEvent',
    'BookingConfirmedEvent',
    'BookingSnapshot',
    'DomainEvent',
    'EventReminderDueEvent',
]
