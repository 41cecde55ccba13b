"""
Email template contexts

Outbox email payloads are plain JSON; they are validated into these models
right before rendering, so a corrupted payload fails that one delivery
instead of producing a half-filled email.
"""

from datetime import datetime
from decimal import Decimal
from typing import Type

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.service.ticketing.domain.enum.notification_type import EmailTemplate, ReminderType


class BookingEmailContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    booking_id: str
    event_id: int
    reference: str = Field(min_length=1)
    customer_name: str
    customer_email: EmailStr
    seat_count: int = Field(gt=0)
    total_amount: Decimal = Field(ge=0)
    event_title: str
    event_date: datetime
    event_time: str
    venue_name: str


class ReminderEmailContext(BookingEmailContext):
    reminder_type: ReminderType


class CancellationEmailContext(BookingEmailContext):
    refund_amount: Decimal = Field(ge=0)
    cancellation_fee: Decimal = Field(ge=0)


class WelcomeEmailContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_email: EmailStr
    user_name: str


EMAIL_CONTEXT_BY_TEMPLATE: dict[EmailTemplate, Type[BaseModel]] = {
    EmailTemplate.BOOKING_CONFIRMATION: BookingEmailContext,
    EmailTemplate.EVENT_REMINDER: ReminderEmailContext,
    EmailTemplate.BOOKING_CANCELLATION: CancellationEmailContext,
    EmailTemplate.WELCOME: WelcomeEmailContext,
}
