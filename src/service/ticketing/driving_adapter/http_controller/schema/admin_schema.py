from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
)


class AdminStats(BaseModel):
    """Serialized as ``totalEvents`` / ``totalBookings`` / ``totalRevenue`` / ``upcomingEvents``"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_events: int
    total_bookings: int
    total_revenue: Decimal
    upcoming_events: int


class AdminDashboardResponse(BaseModel):
    stats: AdminStats
    events: List[EventResponse]
    bookings: List[BookingResponse]


class ReminderEnqueueResponse(BaseModel):
    day_before: int
    hour_before: int
