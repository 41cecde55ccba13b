"""
Event Query Repository Implementation - catalog read side
"""

from typing import AsyncContextManager, Callable, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.record_dto import EventRecord, validate_record


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(event_model: EventModel) -> EventEntity:
        return validate_record(EventRecord, event_model).to_entity()

    @Logger.io
    async def list_events(self, *, limit: Optional[int] = None) -> List[EventEntity]:
        stmt = select(EventModel).order_by(EventModel.event_date.asc(), EventModel.id.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(EventModel).where(EventModel.id == event_id))
            event_model = result.scalar_one_or_none()

            if not event_model:
                return None

            return self._to_entity(event_model)

    @Logger.io
    async def list_by_ids(self, *, event_ids: Iterable[int]) -> List[EventEntity]:
        ids = list(set(event_ids))
        if not ids:
            return []

        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel).where(EventModel.id.in_(ids)).order_by(EventModel.id)
            )
            return [self._to_entity(model) for model in result.scalars().all()]
