"""Application layer DTOs"""

from src.service.ticketing.app.dto.email_context import (
    BookingEmailContext,
    CancellationEmailContext,
    ReminderEmailContext,
    WelcomeEmailContext,
)
from src.service.ticketing.app.dto.storefront_dto import (
    AdminDashboard,
    BookingDetail,
    BookingWithEvent,
    CancellationQuote,
    EventSearchResult,
    OutboxDispatchResult,
    UserDashboard,
)

__all__ = [
    'AdminDashboard',
    'BookingDetail',
    'BookingEmailContext',
    'BookingWithEvent',
    'CancellationEmailContext',
    'CancellationQuote',
    'EventSearchResult',
    'OutboxDispatchResult',
    'ReminderEmailContext',
    'UserDashboard',
    'WelcomeEmailContext',
]
