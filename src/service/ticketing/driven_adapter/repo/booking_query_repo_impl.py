"""
Booking Query Repository Implementation

Bookings are returned with ``seat_ids`` loaded from their booked-seat rows in
selection order.
"""

from collections import defaultdict
from datetime import datetime
from typing import AsyncContextManager, Callable, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.driven_adapter.model.booking_model import (
    BookedSeatModel,
    BookingModel,
)
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.record_dto import BookingRecord, validate_record


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(booking_model: BookingModel, seat_ids: List[int]) -> Booking:
        return validate_record(BookingRecord, booking_model).to_entity(seat_ids=seat_ids)

    @staticmethod
    async def _load_seat_ids(
        session: AsyncSession, booking_ids: Sequence[UUID]
    ) -> Dict[UUID, List[int]]:
        if not booking_ids:
            return {}

        result = await session.execute(
            select(BookedSeatModel.booking_id, BookedSeatModel.seat_id)
            .where(BookedSeatModel.booking_id.in_(booking_ids))
            .order_by(BookedSeatModel.id)
        )
        seat_ids: Dict[UUID, List[int]] = defaultdict(list)
        for booking_id, seat_id in result.all():
            seat_ids[booking_id].append(seat_id)
        return seat_ids

    async def _to_entities(
        self, session: AsyncSession, booking_models: Sequence[BookingModel]
    ) -> List[Booking]:
        seat_ids = await self._load_seat_ids(session, [model.id for model in booking_models])
        return [self._to_entity(model, seat_ids.get(model.id, [])) for model in booking_models]

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            booking_model = result.scalar_one_or_none()

            if not booking_model:
                return None

            seat_ids = await self._load_seat_ids(session, [booking_model.id])
            return self._to_entity(booking_model, seat_ids.get(booking_model.id, []))

    @Logger.io
    async def list_by_user(self, *, user_id: str) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc())
            )
            return await self._to_entities(session, result.scalars().all())

    @Logger.io
    async def list_recent(self, *, limit: Optional[int] = None) -> List[Booking]:
        stmt = select(BookingModel).order_by(BookingModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return await self._to_entities(session, result.scalars().all())

    @Logger.io
    async def list_confirmed_for_events_starting_between(
        self, *, start_after: datetime, start_until: datetime
    ) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel)
                .join(EventModel, EventModel.id == BookingModel.event_id)
                .where(
                    BookingModel.booking_status == BookingStatus.CONFIRMED.value,
                    EventModel.event_date > start_after,
                    EventModel.event_date <= start_until,
                )
                .order_by(EventModel.event_date, BookingModel.created_at)
            )
            return await self._to_entities(session, result.scalars().all())
