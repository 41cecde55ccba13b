from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.service.ticketing.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        """Booking with its ``seat_ids`` loaded from the booked-seat rows"""
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: str) -> List[Booking]:
        """Bookings of one user, newest first"""
        pass

    @abstractmethod
    async def list_recent(self, *, limit: Optional[int] = None) -> List[Booking]:
        """All bookings, newest first"""
        pass

    @abstractmethod
    async def list_confirmed_for_events_starting_between(
        self, *, start_after: datetime, start_until: datetime
    ) -> List[Booking]:
        """Confirmed bookings whose event starts in ``(start_after, start_until]``"""
        pass
