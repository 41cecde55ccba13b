from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional
from unittest.mock import AsyncMock, Mock

from uuid_utils.compat import uuid7

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.seat_entity import SeatEntity
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.enum.event_status import EventCategory, EventStatus
from src.service.ticketing.domain.enum.seat_type import SeatType


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_event(
    *,
    id: int = 1,
    title: str = 'Summer Music Festival',
    category: EventCategory = EventCategory.CONCERT,
    venue_name: str = 'Central Park Arena',
    event_date: Optional[datetime] = None,
    base_price: Decimal = Decimal('45.00'),
    total_seats: int = 50,
    available_seats: Optional[int] = None,
    status: EventStatus = EventStatus.ACTIVE,
    description: str = 'Open-air concert',
    created_at: Optional[datetime] = None,
) -> EventEntity:
    return EventEntity(
        id=id,
        title=title,
        category=category,
        venue_name=venue_name,
        event_date=event_date or NOW + timedelta(days=3),
        event_time='19:30',
        base_price=base_price,
        total_seats=total_seats,
        available_seats=total_seats if available_seats is None else available_seats,
        status=status,
        description=description,
        created_at=created_at,
    )


def make_seat(
    *,
    id: int,
    event_id: int = 1,
    row_name: str = 'C',
    seat_number: Optional[int] = None,
    price: Decimal = Decimal('25.00'),
    is_available: int = 1,
    seat_type: SeatType = SeatType.REGULAR,
) -> SeatEntity:
    return SeatEntity(
        id=id,
        event_id=event_id,
        row_name=row_name,
        seat_number=seat_number or id,
        seat_type=seat_type,
        price=price,
        is_available=is_available,
    )


def make_booking(
    *,
    user_id: str = 'user-1',
    event_id: int = 1,
    total_amount: Decimal = Decimal('52.50'),
    seat_ids: Optional[List[int]] = None,
    booking_status: BookingStatus = BookingStatus.CONFIRMED,
    refund_amount: Optional[Decimal] = None,
    booking_reference: str = 'BK12345678ABCD',
    created_at: Optional[datetime] = None,
) -> Booking:
    seat_ids = seat_ids or [1, 2]
    return Booking(
        id=uuid7(),
        user_id=user_id,
        event_id=event_id,
        booking_reference=booking_reference,
        subtotal=Decimal('50.00'),
        booking_fee=Decimal('2.50'),
        total_amount=total_amount,
        customer_name='Alex Rivera',
        customer_email='buyer@example.com',
        seat_count=len(seat_ids),
        qr_code=f'QR_{booking_reference}',
        seat_ids=seat_ids,
        booking_status=booking_status,
        payment_status=PaymentStatus.COMPLETED,
        created_at=created_at or NOW - timedelta(days=1),
        refund_amount=refund_amount,
    )


async def _return_booking(*, booking: Booking, outbox_messages: list) -> Booking:
    """Mock: Return booking as-is (simulates successful persistence)"""
    return booking


class RepositoryMocks:
    def __init__(
        self,
        *,
        events: Optional[List[EventEntity]] = None,
        seats: Optional[List[SeatEntity]] = None,
        bookings: Optional[List[Booking]] = None,
    ) -> None:
        """
        Initialize mock repositories with test data

        Args:
            events: Events returned by the event query repo (by id and listing)
            seats: Seats returned by the seat query repo
            bookings: Bookings returned by the booking query repo
        """
        self.events = events or []
        self.seats = seats or []
        self.bookings = bookings or []
        events_by_id = {event.id: event for event in self.events}
        bookings_by_id = {booking.id: booking for booking in self.bookings}

        # Event query repo
        self.event_query_repo: Mock = AsyncMock()
        self.event_query_repo.get_by_id = AsyncMock(
            side_effect=lambda *, event_id: events_by_id.get(event_id)
        )
        self.event_query_repo.list_events = AsyncMock(return_value=self.events)
        self.event_query_repo.list_by_ids = AsyncMock(
            side_effect=lambda *, event_ids: [e for e in self.events if e.id in event_ids]
        )

        # Seat query repo
        self.seat_query_repo: Mock = AsyncMock()
        self.seat_query_repo.list_by_ids = AsyncMock(
            side_effect=lambda *, seat_ids: [s for s in self.seats if s.id in seat_ids]
        )
        self.seat_query_repo.list_by_event = AsyncMock(return_value=self.seats)
        self.seat_query_repo.list_by_booking = AsyncMock(return_value=self.seats)

        # Booking query repo
        self.booking_query_repo: Mock = AsyncMock()
        self.booking_query_repo.get_by_id = AsyncMock(
            side_effect=lambda *, booking_id: bookings_by_id.get(booking_id)
        )
        self.booking_query_repo.list_by_user = AsyncMock(return_value=self.bookings)
        self.booking_query_repo.list_recent = AsyncMock(return_value=self.bookings)
        self.booking_query_repo.list_confirmed_for_events_starting_between = AsyncMock(
            return_value=self.bookings
        )

        # Booking command repo
        self.booking_command_repo: Mock = AsyncMock()
        self.booking_command_repo.create_booking_atomically = AsyncMock(
            side_effect=_return_booking
        )
        self.booking_command_repo.cancel_booking_atomically = AsyncMock(
            side_effect=_return_booking
        )

        # Outbox repo
        self.outbox_repo: Mock = AsyncMock()
        self.outbox_repo.enqueue = AsyncMock(
            side_effect=lambda *, messages: len(messages)
        )
