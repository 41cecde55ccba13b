"""Use case results handed to the HTTP layer"""

from decimal import Decimal
from typing import List, Optional

import attrs

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.seat_entity import SeatEntity


@attrs.define(frozen=True)
class EventSearchResult:
    events: List[EventEntity]
    active_filter_count: int
    venues: List[str]


@attrs.define(frozen=True)
class BookingDetail:
    booking: Booking
    event: Optional[EventEntity]
    seats: List[SeatEntity]


@attrs.define(frozen=True)
class CancellationQuote:
    booking_id: str
    can_cancel: bool
    hours_until_event: float
    time_label: str
    total_amount: Decimal
    cancellation_fee: Decimal
    refund_amount: Decimal
    reason: Optional[str] = None


@attrs.define(frozen=True)
class BookingWithEvent:
    booking: Booking
    event: Optional[EventEntity]
    is_upcoming: bool


@attrs.define(frozen=True)
class UserDashboard:
    bookings: List[BookingWithEvent]
    total_bookings: int
    upcoming_bookings: int
    total_spent: Decimal


@attrs.define(frozen=True)
class AdminDashboard:
    events: List[EventEntity]
    bookings: List[Booking]
    total_events: int
    total_bookings: int
    total_revenue: Decimal
    upcoming_events: int


@attrs.define(frozen=True)
class OutboxDispatchResult:
    delivered: int = 0
    retried: int = 0
    dead: int = 0

    @property
    def claimed(self) -> int:
        return self.delivered + self.retried + self.dead
