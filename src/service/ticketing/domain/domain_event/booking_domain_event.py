"""
Booking Domain Events

Raised by the booking and cancellation workflows (and the reminder scan) and
turned into outbox messages in the same transaction. Each event snapshots the
booking and event fields its notifications need, so delivery never re-reads
rows that may have changed since.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

import attrs

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.enum.notification_type import NotificationType, ReminderType
from src.service.ticketing.domain.value_object.user_notification import UserNotification


@attrs.define(frozen=True)
class BookingSnapshot:
    booking_id: UUID
    user_id: str
    event_id: int
    reference: str
    customer_name: str
    customer_email: str
    seat_count: int
    total_amount: Decimal
    event_title: str
    event_date: datetime
    event_time: str
    venue_name: str

    @classmethod
    def capture(cls, *, booking: Booking, event: EventEntity) -> 'BookingSnapshot':
        return cls(
            booking_id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            reference=booking.display_reference,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            seat_count=booking.seat_count,
            total_amount=booking.total_amount,
            event_title=event.title,
            event_date=event.event_date,
            event_time=event.event_time,
            venue_name=event.venue_name,
        )

    def email_context(self) -> Dict[str, Any]:
        return {
            'booking_id': str(self.booking_id),
            'event_id': self.event_id,
            'reference': self.reference,
            'customer_name': self.customer_name,
            'customer_email': self.customer_email,
            'seat_count': self.seat_count,
            'total_amount': str(self.total_amount),
            'event_title': self.event_title,
            'event_date': self.event_date.isoformat(),
            'event_time': self.event_time,
            'venue_name': self.venue_name,
        }


@attrs.define(frozen=True)
class BookingConfirmedEvent:
    snapshot: BookingSnapshot
    occurred_at: datetime

    @property
    def aggregate_id(self) -> UUID:
        return self.snapshot.booking_id

    @classmethod
    def from_booking(
        cls, *, booking: Booking, event: EventEntity, occurred_at: datetime
    ) -> 'BookingConfirmedEvent':
        return cls(
            snapshot=BookingSnapshot.capture(booking=booking, event=event),
            occurred_at=occurred_at,
        )

    def email_context(self) -> Dict[str, Any]:
        return self.snapshot.email_context()

    def to_notification(self) -> UserNotification:
        snapshot = self.snapshot
        return UserNotification(
            type=NotificationType.BOOKING_CONFIRMED,
            title='Booking Confirmed',
            message=(
                f'Your booking for {snapshot.event_title} has been confirmed! '
                f'Reference: {snapshot.reference}'
            ),
            user_id=snapshot.user_id,
            timestamp=self.occurred_at,
            booking_id=str(snapshot.booking_id),
            event_id=snapshot.event_id,
        )


@attrs.define(frozen=True)
class BookingCancelledEvent:
    snapshot: BookingSnapshot
    refund_amount: Decimal
    cancellation_fee: Decimal
    occurred_at: datetime

    @property
    def aggregate_id(self) -> UUID:
        return self.snapshot.booking_id

    @classmethod
    def from_booking(
        cls,
        *,
        booking: Booking,
        event: EventEntity,
        cancellation_fee: Decimal,
        occurred_at: datetime,
    ) -> 'BookingCancelledEvent':
        return cls(
            snapshot=BookingSnapshot.capture(booking=booking, event=event),
            refund_amount=booking.refund_amount or Decimal('0'),
            cancellation_fee=cancellation_fee,
            occurred_at=occurred_at,
        )

    def email_context(self) -> Dict[str, Any]:
        return {
            **self.snapshot.email_context(),
            'refund_amount': str(self.refund_amount),
            'cancellation_fee': str(self.cancellation_fee),
        }

    def to_notification(self) -> UserNotification:
        snapshot = self.snapshot
        return UserNotification(
            type=NotificationType.BOOKING_CANCELLED,
            title='Booking Cancelled',
            message=(
                f'Your booking for {snapshot.event_title} has been cancelled. '
                f'Refund of ${self.refund_amount:.2f} is being processed.'
            ),
            user_id=snapshot.user_id,
            timestamp=self.occurred_at,
            booking_id=str(snapshot.booking_id),
            event_id=snapshot.event_id,
        )


@attrs.define(frozen=True)
class EventReminderDueEvent:
    snapshot: BookingSnapshot
    reminder_type: ReminderType
    occurred_at: datetime

    @property
    def aggregate_id(self) -> UUID:
        return self.snapshot.booking_id

    @property
    def dedupe_key(self) -> str:
        return f'reminder:{self.snapshot.booking_id}:{self.reminder_type.value}'

    @classmethod
    def from_booking(
        cls,
        *,
        booking: Booking,
        event: EventEntity,
        reminder_type: ReminderType,
        occurred_at: datetime,
    ) -> 'EventReminderDueEvent':
        return cls(
            snapshot=BookingSnapshot.capture(booking=booking, event=event),
            reminder_type=reminder_type,
            occurred_at=occurred_at,
        )

    def email_context(self) -> Dict[str, Any]:
        return {**self.snapshot.email_context(), 'reminder_type': self.reminder_type.value}
