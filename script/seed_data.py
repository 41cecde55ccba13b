#!/usr/bin/env python3
"""
Database Seed Script
Populate sample catalog data into the database

Features:
1. Ensure Tables - create any missing table (local runs; deployments use alembic)
2. Create Events - one event per sample entry, dated relative to now
3. Create Seats - a row/seat grid per event; row A is VIP, row B premium
4. Print Session Tokens - a customer and an admin token for calling the API

Notes:
- Seeding is skipped when events already exist
- Tokens are signed with SECRET_KEY, the same key the API verifies with
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from src.service.ticketing.domain.enum.event_status import EventCategory, EventStatus
from src.service.ticketing.domain.enum.seat_type import SeatType
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.seat_model import SeatModel
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


ROWS = ['A', 'B', 'C', 'D', 'E']
SEATS_PER_ROW = 10
SEAT_TYPE_BY_ROW = {'A': SeatType.VIP, 'B': SeatType.PREMIUM}
PRICE_MULTIPLIER = {
    SeatType.VIP: Decimal('2.0'),
    SeatType.PREMIUM: Decimal('1.5'),
    SeatType.REGULAR: Decimal('1.0'),
}


@dataclass
class EventConfig:
    """Event seed configuration"""

    title: str
    category: EventCategory
    venue_name: str
    days_ahead: int
    event_time: str
    base_price: Decimal
    description: str = ''
    duration: int = 120


SAMPLE_EVENTS = [
    EventConfig('Summer Music Festival', EventCategory.CONCERT, 'Central Park Arena', 3, '19:30',
                Decimal('45.00'), 'Open-air concert with local bands', 240),
    EventConfig('Jazz Night', EventCategory.CONCERT, 'Blue Note Hall', 10, '21:00',
                Decimal('30.00'), 'An evening of modern jazz'),
    EventConfig('Rock Legends Live', EventCategory.CONCERT, 'Stadium One', 40, '20:00',
                Decimal('85.00'), 'Classic rock tribute night', 180),
    EventConfig('Midnight Premiere', EventCategory.MOVIE, 'Grand Cinema', 1, '23:59',
                Decimal('15.00'), 'Premiere screening of the season blockbuster', 150),
    EventConfig('Indie Film Showcase', EventCategory.MOVIE, 'Arthouse Theater', 14, '18:00',
                Decimal('12.50'), 'Short films from emerging directors', 110),
    EventConfig('City Derby', EventCategory.SPORTS, 'Stadium One', 7, '17:00',
                Decimal('55.00'), 'Local football rivalry', 105),
    EventConfig('Basketball Finals', EventCategory.SPORTS, 'Metro Arena', 25, '19:00',
                Decimal('120.00'), 'Championship game seven', 150),
    EventConfig('Hamlet', EventCategory.THEATER, 'Royal Playhouse', 5, '19:00',
                Decimal('65.00'), 'Shakespeare in a modern staging', 180),
    EventConfig('Comedy Hour', EventCategory.THEATER, 'Blue Note Hall', 2, '20:30',
                Decimal('22.00'), 'Stand-up showcase', 60),
    EventConfig('Symphony Gala', EventCategory.CONCERT, 'Royal Playhouse', 60, '19:30',
                Decimal('150.00'), 'Orchestra season opening', 150),
]

TEST_SESSIONS = [
    SessionContext(user_id='user-customer-1', email='b@t.com', name='init customer'),
    SessionContext(
        user_id='user-admin-1', email='admin@t.com', name='init admin', role=UserRole.ADMIN
    ),
]


def _build_seats(event_id: int, base_price: Decimal) -> list[SeatModel]:
    seats = []
    for y, row_name in enumerate(ROWS):
        seat_type = SEAT_TYPE_BY_ROW.get(row_name, SeatType.REGULAR)
        price = (base_price * PRICE_MULTIPLIER[seat_type]).quantize(Decimal('0.01'))
        for number in range(1, SEATS_PER_ROW + 1):
            seats.append(
                SeatModel(
                    event_id=event_id,
                    row_name=row_name,
                    seat_number=number,
                    seat_type=seat_type.value,
                    price=price,
                    is_available=1,
                    x_position=number,
                    y_position=y + 1,
                )
            )
    return seats


async def create_events() -> int:
    """Create sample events with their seats

    Returns:
        int: number of events created
    """
    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    total_seats = len(ROWS) * SEATS_PER_ROW

    session_maker = get_session_maker()
    async with session_maker() as session:
        async with session.begin():
            existing = await session.scalar(select(func.count()).select_from(EventModel))
            if existing:
                print(f'⏭️  {existing} events already exist, skipping catalog seed')
                return 0

            print(f'🎭 Creating {len(SAMPLE_EVENTS)} events...')
            for config in SAMPLE_EVENTS:
                hour, minute = (int(part) for part in config.event_time.split(':'))
                event = EventModel(
                    title=config.title,
                    description=config.description,
                    category=config.category.value,
                    venue_name=config.venue_name,
                    event_date=(now + timedelta(days=config.days_ahead)).replace(
                        hour=hour, minute=minute
                    ),
                    event_time=config.event_time,
                    duration=config.duration,
                    base_price=config.base_price,
                    total_seats=total_seats,
                    available_seats=total_seats,
                    status=EventStatus.ACTIVE.value,
                )
                session.add(event)
                await session.flush()
                session.add_all(_build_seats(event.id, config.base_price))
                print(f'   ✅ {config.title} (id={event.id}, {total_seats} seats)')

        return len(SAMPLE_EVENTS)


def print_session_tokens() -> None:
    jwt_auth = JwtAuth()
    print('🔑 Session tokens (Authorization: Bearer <token>):')
    for session in TEST_SESSIONS:
        token = jwt_auth.create_session_token(session)
        print(f'   {session.role.value:<8} {session.email}: {token}')


async def main() -> None:
    print('🌱 Seeding TicketHub storefront...')
    await create_db_and_tables()
    created = await create_events()
    print(f'✅ Seed complete ({created} events created)')
    print_session_tokens()
    await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
