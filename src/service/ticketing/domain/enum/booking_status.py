"""
Booking Lifecycle Enums - Domain Value Objects
"""

from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'


class PaymentMethod(StrEnum):
    CARD = 'card'
    PAYPAL = 'paypal'
