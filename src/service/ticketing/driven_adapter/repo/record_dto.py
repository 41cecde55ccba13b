"""
Validated record DTOs at the datastore boundary

Every row read by a repository goes through one of these models before it becomes
a domain entity. A row that does not validate raises ``MalformedRecordError``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from src.platform.exception.exceptions import MalformedRecordError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.entity.seat_entity import SeatEntity
from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.enum.event_status import EventCategory, EventStatus
from src.service.ticketing.domain.enum.outbox_status import OutboxKind, OutboxStatus
from src.service.ticketing.domain.enum.seat_type import SeatType


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class EventRecord(_Record):
    id: int
    title: str = Field(min_length=1)
    description: str = ''
    category: EventCategory
    venue_name: str = Field(min_length=1)
    venue_address: Optional[str] = None
    event_date: datetime
    event_time: str
    duration: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    base_price: Decimal = Field(ge=0)
    total_seats: int = Field(ge=0)
    available_seats: int = Field(ge=0)
    status: EventStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode='after')
    def _check_seat_counters(self) -> 'EventRecord':
        if self.available_seats > self.total_seats:
            raise ValueError('available_seats exceeds total_seats')
        return self

    def to_entity(self) -> EventEntity:
        return EventEntity(
            id=self.id,
            title=self.title,
            description=self.description or '',
            category=self.category,
            venue_name=self.venue_name,
            venue_address=self.venue_address,
            event_date=self.event_date,
            event_time=self.event_time,
            duration=self.duration,
            image_url=self.image_url,
            base_price=self.base_price,
            total_seats=self.total_seats,
            available_seats=self.available_seats,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SeatRecord(_Record):
    id: int
    event_id: int
    row_name: str = Field(min_length=1)
    seat_number: int = Field(gt=0)
    seat_type: SeatType
    price: Decimal = Field(ge=0)
    is_available: int = Field(ge=0, le=1)
    x_position: Optional[int] = None
    y_position: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_entity(self) -> SeatEntity:
        return SeatEntity(
            id=self.id,
            event_id=self.event_id,
            row_name=self.row_name,
            seat_number=self.seat_number,
            seat_type=self.seat_type,
            price=self.price,
            is_available=self.is_available,
            x_position=self.x_position,
            y_position=self.y_position,
            created_at=self.created_at,
        )


class BookingRecord(_Record):
    id: UUID
    user_id: str
    event_id: int
    booking_reference: str
    subtotal: Decimal = Field(ge=0)
    booking_fee: Decimal = Field(ge=0)
    total_amount: Decimal = Field(ge=0)
    booking_status: BookingStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    seat_count: int = Field(gt=0)
    qr_code: str
    refund_amount: Optional[Decimal] = Field(default=None, ge=0)
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    def to_entity(self, *, seat_ids: Optional[List[int]] = None) -> Booking:
        return Booking(
            id=self.id,
            user_id=self.user_id,
            event_id=self.event_id,
            booking_reference=self.booking_reference,
            subtotal=self.subtotal,
            booking_fee=self.booking_fee,
            total_amount=self.total_amount,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_phone=self.customer_phone,
            seat_count=self.seat_count,
            qr_code=self.qr_code,
            seat_ids=list(seat_ids or []),
            booking_status=self.booking_status,
            payment_status=self.payment_status,
            payment_method=self.payment_method,
            created_at=self.created_at,
            cancelled_at=self.cancelled_at,
            refund_amount=self.refund_amount,
        )


class OutboxMessageRecord(_Record):
    id: UUID
    kind: OutboxKind
    topic: str = Field(min_length=1)
    payload: Dict[str, Any]
    dedupe_key: Optional[str] = None
    status: OutboxStatus
    attempts: int = Field(ge=0)
    next_attempt_at: Optional[datetime] = None
    last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    def to_entity(self) -> OutboxMessage:
        return OutboxMessage(
            id=self.id,
            kind=self.kind,
            topic=self.topic,
            payload=dict(self.payload),
            dedupe_key=self.dedupe_key,
            status=self.status,
            attempts=self.attempts,
            next_attempt_at=self.next_attempt_at,
            last_error=self.last_error,
            created_at=self.created_at,
            delivered_at=self.delivered_at,
        )


RecordT = TypeVar('RecordT', bound=_Record)


def validate_record(record_cls: Type[RecordT], row: Any) -> RecordT:
    """Validate an ORM row (or mapping) into ``record_cls``"""
    try:
        if isinstance(row, dict):
            return record_cls.model_validate(row)
        return record_cls.model_validate(row, from_attributes=True)
    except ValidationError as e:
        row_id = row.get('id') if isinstance(row, dict) else getattr(row, 'id', None)
        Logger.base.error(
            f'🧱 [RECORD] Malformed {record_cls.__name__} row id={row_id}: '
            f'{e.error_count()} error(s)'
        )
        raise MalformedRecordError(
            f'Malformed {record_cls.__name__.removesuffix("Record").lower()} record {row_id}'
        ) from e
