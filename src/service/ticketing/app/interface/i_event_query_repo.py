from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    """Read side of the event catalog"""

    @abstractmethod
    async def list_events(self, *, limit: Optional[int] = None) -> List[EventEntity]:
        """Events ordered by ``event_date`` ascending; ``limit=None`` returns all"""
        pass

    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def list_by_ids(self, *, event_ids: Iterable[int]) -> List[EventEntity]:
        pass
