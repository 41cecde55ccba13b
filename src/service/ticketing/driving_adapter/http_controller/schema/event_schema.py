from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.seat_entity import SeatEntity
from src.service.ticketing.domain.enum.event_status import EventCategory, EventStatus
from src.service.ticketing.domain.enum.seat_type import SeatType


class EventResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'title': 'Summer Music Festival',
                'description': 'Open-air concert with local bands',
                'category': 'concert',
                'venue_name': 'Central Park Arena',
                'venue_address': '100 Park Ave',
                'event_date': '2026-07-18T19:30:00+00:00',
                'event_time': '19:30',
                'duration': 180,
                'image_url': None,
                'base_price': '45.00',
                'total_seats': 120,
                'available_seats': 87,
                'status': 'active',
            }
        }
    }

    id: int
    title: str
    description: str
    category: EventCategory
    venue_name: str
    venue_address: Optional[str] = None
    event_date: datetime
    event_time: str
    duration: Optional[int] = None
    image_url: Optional[str] = None
    base_price: Decimal
    total_seats: int
    available_seats: int
    status: EventStatus
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id or 0,
            title=event.title,
            description=event.description,
            category=event.category,
            venue_name=event.venue_name,
            venue_address=event.venue_address,
            event_date=event.event_date,
            event_time=event.event_time,
            duration=event.duration,
            image_url=event.image_url,
            base_price=event.base_price,
            total_seats=event.total_seats,
            available_seats=event.available_seats,
            status=event.status,
            created_at=event.created_at,
        )


class EventListResponse(BaseModel):
    events: List[EventResponse]
    active_filter_count: int
    venues: List[str]


class SeatResponse(BaseModel):
    id: int
    event_id: int
    row_name: str
    seat_number: int
    seat_type: SeatType
    price: Decimal
    is_available: int
    label: str
    x_position: Optional[int] = None
    y_position: Optional[int] = None

    @classmethod
    def from_entity(cls, seat: SeatEntity) -> 'SeatResponse':
        return cls(
            id=seat.id or 0,
            event_id=seat.event_id,
            row_name=seat.row_name,
            seat_number=seat.seat_number,
            seat_type=seat.seat_type,
            price=seat.price,
            is_available=seat.is_available,
            label=seat.label,
            x_position=seat.x_position,
            y_position=seat.y_position,
        )
