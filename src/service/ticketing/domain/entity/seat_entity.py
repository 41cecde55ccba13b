from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.seat_type import SeatType


@attrs.define
class SeatEntity:
    event_id: int
    row_name: str
    seat_number: int = attrs.field(validator=attrs.validators.gt(0))
    seat_type: SeatType
    price: Decimal
    is_available: int = attrs.field(default=1, validator=attrs.validators.in_((0, 1)))
    x_position: Optional[int] = None
    y_position: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def available(self) -> bool:
        return self.is_available == 1

    @property
    def label(self) -> str:
        return f'Row {self.row_name}, Seat {self.seat_number}'
