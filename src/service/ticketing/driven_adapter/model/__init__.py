"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ticketing.driven_adapter.model.booking_model import BookedSeatModel, BookingModel
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.outbox_message_model import OutboxMessageModel
from src.service.ticketing.driven_adapter.model.seat_model import SeatModel

__all__ = [
    'BookedSeatModel',
    'BookingModel',
    'EventModel',
    'OutboxMessageModel',
    'SeatModel',
]
