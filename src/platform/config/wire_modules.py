"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticketing.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    enqueue_event_reminders_use_case,
    send_welcome_email_use_case,
)
from src.service.ticketing.app.query import (
    dashboard_use_case,
    get_booking_use_case,
    get_event_use_case,
    list_events_use_case,
)
from src.service.ticketing.driving_adapter.http_controller import notification_controller
from src.service.ticketing.driving_adapter.http_controller.auth import session_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    cancel_booking_use_case,
    enqueue_event_reminders_use_case,
    send_welcome_email_use_case,
    list_events_use_case,
    get_event_use_case,
    get_booking_use_case,
    dashboard_use_case,
    notification_controller,
    session_auth,
]
