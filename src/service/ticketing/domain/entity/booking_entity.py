from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.enum.booking_status import (
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.ticketing.domain.value_object.booking_reference import (
    generate_booking_reference,
    qr_code_for,
)
from src.service.ticketing.domain.value_object.money import PriceBreakdown, RefundQuote
from src.service.ticketing.domain.value_object.ticket_qr import resolve_display_reference


@attrs.define
class BookedSeat:
    booking_id: UUID
    seat_id: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@attrs.define
class Booking:
    id: UUID
    user_id: str
    event_id: int
    booking_reference: str
    subtotal: Decimal
    booking_fee: Decimal
    total_amount: Decimal
    customer_name: str
    customer_email: str
    seat_count: int
    qr_code: str
    seat_ids: List[int] = attrs.field(factory=list)
    booking_status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.CARD
    customer_phone: Optional[str] = None
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    refund_amount: Optional[Decimal] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: str,
        event_id: int,
        seat_ids: List[int],
        price: PriceBreakdown,
        customer_name: str,
        customer_email: str,
        customer_phone: Optional[str] = None,
        payment_method: PaymentMethod = PaymentMethod.CARD,
        now: Optional[datetime] = None,
    ) -> 'Booking':
        """
        Build a confirmed booking for the given seats

        Payment is captured upstream by the storefront checkout, so a freshly created
        booking is already confirmed and completed.
        """
        if not seat_ids:
            raise DomainError('At least one seat must be selected')
        if len(set(seat_ids)) != len(seat_ids):
            raise DomainError('Duplicate seats in selection')

        now = now or datetime.now(timezone.utc)
        reference = generate_booking_reference(now_ms=int(now.timestamp() * 1000))
        return cls(
            id=uuid7(),
            user_id=user_id,
            event_id=event_id,
            booking_reference=reference,
            subtotal=price.subtotal,
            booking_fee=price.booking_fee,
            total_amount=price.total,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            seat_count=len(seat_ids),
            qr_code=qr_code_for(reference),
            seat_ids=list(seat_ids),
            booking_status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.COMPLETED,
            payment_method=payment_method,
            created_at=now,
        )

    @property
    def is_cancelled(self) -> bool:
        return self.booking_status == BookingStatus.CANCELLED

    @property
    def display_reference(self) -> str:
        return resolve_display_reference(
            booking_id=str(self.id), booking_reference=self.booking_reference
        )

    def refund_quote(self, *, fee_rate: Decimal) -> RefundQuote:
        return RefundQuote.from_total(self.total_amount, fee_rate=fee_rate)

    @Logger.io
    def cancel(self, *, refund: RefundQuote, now: datetime) -> 'Booking':
        if self.is_cancelled:
            raise DomainError('Booking already cancelled')
        return attrs.evolve(
            self,
            booking_status=BookingStatus.CANCELLED,
            cancelled_at=now,
            refund_amount=refund.refund_amount,
        )
