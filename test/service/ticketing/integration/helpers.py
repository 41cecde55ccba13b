from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.outbox_message_model import OutboxMessageModel
from src.service.ticketing.driven_adapter.model.seat_model import SeatModel


async def seed_event(
    database: Database,
    *,
    seat_count: int = 4,
    event_date: Optional[datetime] = None,
    seat_price: Decimal = Decimal('25.00'),
) -> Tuple[int, List[int]]:
    """Insert one active event with a single row of seats; returns (event_id, seat_ids)"""
    async with database.session() as session:
        async with session.begin():
            event = EventModel(
                title='Summer Music Festival',
                description='Open-air concert',
                category='concert',
                venue_name='Central Park Arena',
                event_date=event_date or datetime.now(timezone.utc) + timedelta(days=3),
                event_time='19:30',
                base_price=Decimal('45.00'),
                total_seats=seat_count,
                available_seats=seat_count,
                status='active',
            )
            session.add(event)
            await session.flush()

            seats = [
                SeatModel(
                    event_id=event.id,
                    row_name='A',
                    seat_number=number,
                    seat_type='regular',
                    price=seat_price,
                    is_available=1,
                )
                for number in range(1, seat_count + 1)
            ]
            session.add_all(seats)
            await session.flush()
            event_id, seat_ids = event.id, [seat.id for seat in seats]

    return event_id, seat_ids


async def available_seats_of(database: Database, *, event_id: int) -> int:
    async with database.session() as session:
        result = await session.execute(
            select(EventModel.available_seats).where(EventModel.id == event_id)
        )
        return result.scalar_one()


async def seat_flags(database: Database, *, seat_ids: List[int]) -> dict[int, int]:
    async with database.session() as session:
        result = await session.execute(
            select(SeatModel.id, SeatModel.is_available).where(SeatModel.id.in_(seat_ids))
        )
        return {seat_id: flag for seat_id, flag in result.all()}


async def count_bookings(database: Database) -> int:
    async with database.session() as session:
        result = await session.execute(select(func.count()).select_from(BookingModel))
        return result.scalar_one()


async def count_outbox_messages(database: Database, *, topic: Optional[str] = None) -> int:
    query = select(func.count()).select_from(OutboxMessageModel)
    if topic is not None:
        query = query.where(OutboxMessageModel.topic == topic)
    async with database.session() as session:
        result = await session.execute(query)
        return result.scalar_one()
