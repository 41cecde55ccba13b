from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
    SeatResponse,
)


class BookingCreateRequest(BaseModel):
    event_id: int
    seat_ids: List[int] = Field(min_length=1)
    customer_name: str = Field(min_length=1, max_length=255)
    customer_email: EmailStr
    customer_phone: Optional[str] = Field(default=None, max_length=50)
    payment_method: PaymentMethod = PaymentMethod.CARD

    model_config = {
        'json_schema_extra': {
            'example': {
                'event_id': 1,
                'seat_ids': [12, 13],
                'customer_name': 'Alex Rivera',
                'customer_email': 'alex@example.com',
                'customer_phone': '+1 555 0100',
                'payment_method': 'card',
            }
        }
    }


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'booking_reference': 'BK12345678A1B2',
                'subtotal': '50.00',
                'booking_fee': '2.50',
                'total_amount': '52.50',
                'booking_status': 'confirmed',
                'payment_status': 'completed',
            }
        },
    }

    id: UUID  # UUID7
    user_id: str
    event_id: int
    booking_reference: str
    display_reference: str
    subtotal: Decimal
    booking_fee: Decimal
    total_amount: Decimal
    booking_status: BookingStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    seat_count: int
    seat_ids: List[int]
    qr_code: str
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    refund_amount: Optional[Decimal] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            booking_reference=booking.booking_reference,
            display_reference=booking.display_reference,
            subtotal=booking.subtotal,
            booking_fee=booking.booking_fee,
            total_amount=booking.total_amount,
            booking_status=booking.booking_status,
            payment_status=booking.payment_status,
            payment_method=booking.payment_method,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            seat_count=booking.seat_count,
            seat_ids=list(booking.seat_ids),
            qr_code=booking.qr_code,
            created_at=booking.created_at,
            cancelled_at=booking.cancelled_at,
            refund_amount=booking.refund_amount,
        )


class BookingDetailResponse(BaseModel):
    booking: BookingResponse
    event: Optional[EventResponse] = None
    seats: List[SeatResponse]


class BookingWithEventResponse(BaseModel):
    booking: BookingResponse
    event: Optional[EventResponse] = None
    is_upcoming: bool


class MyBookingsResponse(BaseModel):
    bookings: List[BookingWithEventResponse]
    total_bookings: int
    upcoming_bookings: int
    total_spent: Decimal


class CancellationQuoteResponse(BaseModel):
    booking_id: str
    can_cancel: bool
    hours_until_event: float
    time_label: str
    total_amount: Decimal
    cancellation_fee: Decimal
    refund_amount: Decimal
    reason: Optional[str] = None
