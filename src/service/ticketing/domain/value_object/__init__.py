"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.email_message import EmailMessage
from src.service.ticketing.domain.value_object.event_search_filter import EventSearchFilter
from src.service.ticketing.domain.value_object.money import PriceBreakdown, RefundQuote
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.domain.value_object.user_notification import UserNotification

__all__ = [
    'EmailMessage',
    'EventSearchFilter',
    'PriceBreakdown',
    'RefundQuote',
    'SessionContext',
    'UserNotification',
]
