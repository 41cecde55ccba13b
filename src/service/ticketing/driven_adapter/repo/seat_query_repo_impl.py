from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.ticketing.domain.entity.seat_entity import SeatEntity
from src.service.ticketing.driven_adapter.model.booking_model import BookedSeatModel
from src.service.ticketing.driven_adapter.model.seat_model import SeatModel
from src.service.ticketing.driven_adapter.repo.record_dto import SeatRecord, validate_record


class SeatQueryRepoImpl(ISeatQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(seat_model: SeatModel) -> SeatEntity:
        return validate_record(SeatRecord, seat_model).to_entity()

    @Logger.io
    async def list_by_event(self, *, event_id: int) -> List[SeatEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(SeatModel)
                .where(SeatModel.event_id == event_id)
                .order_by(SeatModel.row_name, SeatModel.seat_number)
            )
            return [self._to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_by_ids(self, *, seat_ids: List[int]) -> List[SeatEntity]:
        if not seat_ids:
            return []

        async with self.session_factory() as session:
            result = await session.execute(
                select(SeatModel)
                .where(SeatModel.id.in_(set(seat_ids)))
                .order_by(SeatModel.row_name, SeatModel.seat_number)
            )
            return [self._to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> List[SeatEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(SeatModel)
                .join(BookedSeatModel, BookedSeatModel.seat_id == SeatModel.id)
                .where(BookedSeatModel.booking_id == booking_id)
                .order_by(SeatModel.row_name, SeatModel.seat_number)
            )
            return [self._to_entity(model) for model in result.scalars().all()]
