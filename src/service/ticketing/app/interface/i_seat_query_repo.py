from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.service.ticketing.domain.entity.seat_entity import SeatEntity


class ISeatQueryRepo(ABC):
    """Read side of the seat inventory; results are ordered by row then seat number"""

    @abstractmethod
    async def list_by_event(self, *, event_id: int) -> List[SeatEntity]:
        pass

    @abstractmethod
    async def list_by_ids(self, *, seat_ids: List[int]) -> List[SeatEntity]:
        """Seats matching ``seat_ids``; unknown ids are simply absent from the result"""
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: UUID) -> List[SeatEntity]:
        pass
