from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.enum.event_status import EventCategory, EventStatus


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Event {attribute.name} cannot be empty')


def _validate_seat_counters(
    instance: 'EventEntity', attribute: attrs.Attribute, value: int
) -> None:
    if value < 0 or value > instance.total_seats:
        raise ValueError(
            f'Event available_seats must be within [0, {instance.total_seats}], got {value}'
        )


@attrs.define
class EventEntity:
    title: str = attrs.field(validator=_validate_non_empty_string)
    category: EventCategory
    venue_name: str = attrs.field(validator=_validate_non_empty_string)
    event_date: datetime
    event_time: str
    base_price: Decimal
    total_seats: int = attrs.field(validator=attrs.validators.ge(0))
    available_seats: int = attrs.field(validator=_validate_seat_counters)
    status: EventStatus = EventStatus.ACTIVE
    description: str = ''
    venue_address: Optional[str] = None
    duration: Optional[int] = None
    image_url: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def sold_seats(self) -> int:
        return self.total_seats - self.available_seats

    def is_upcoming(self, now: datetime) -> bool:
        return self.event_date > now

    def validate_bookable(self) -> None:
        if self.status != EventStatus.ACTIVE:
            raise DomainError(f'Event is {self.status.value} and cannot be booked')
