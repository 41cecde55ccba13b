from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.seat_entity import SeatEntity


class GetEventUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo, seat_query_repo: ISeatQueryRepo):
        self.event_query_repo = event_query_repo
        self.seat_query_repo = seat_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, seat_query_repo=seat_query_repo)

    @Logger.io
    async def get_event(self, *, event_id: int) -> EventEntity:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        return event

    @Logger.io
    async def list_seats(self, *, event_id: int) -> List[SeatEntity]:
        """Seat map of an event ordered by row, then seat number"""
        await self.get_event(event_id=event_id)
        return await self.seat_query_repo.list_by_event(event_id=event_id)
