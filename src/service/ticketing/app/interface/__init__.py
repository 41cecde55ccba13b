"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_email_sender import IEmailSender
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_outbox_repo import IOutboxRepo
from src.service.ticketing.app.interface.i_realtime_publisher import IRealtimePublisher
from src.service.ticketing.app.interface.i_seat_query_repo import ISeatQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'IEmailSender',
    'IEventQueryRepo',
    'IOutboxRepo',
    'IRealtimePublisher',
    'ISeatQueryRepo',
]
