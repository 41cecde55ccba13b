"""
Money value objects

All amounts are ``Decimal`` quantized to cents with ROUND_HALF_UP, so
$52.50 x 10% is exactly $5.25 and never a binary-float approximation.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

import attrs

from src.platform.exception.exceptions import DomainError


CENT = Decimal('0.01')


def to_cents(amount: Decimal | int | str) -> Decimal:
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


@attrs.define(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    booking_fee: Decimal
    total: Decimal

    @classmethod
    def from_seat_prices(cls, prices: Iterable[Decimal], *, fee_rate: Decimal) -> 'PriceBreakdown':
        prices = list(prices)
        if not prices:
            raise DomainError('At least one seat must be selected')
        if any(price < 0 for price in prices):
            raise DomainError('Seat price cannot be negative')

        subtotal = to_cents(sum(prices, Decimal('0')))
        booking_fee = to_cents(subtotal * fee_rate)
        return cls(subtotal=subtotal, booking_fee=booking_fee, total=subtotal + booking_fee)


@attrs.define(frozen=True)
class RefundQuote:
    total_amount: Decimal
    cancellation_fee: Decimal
    refund_amount: Decimal

    @classmethod
    def from_total(cls, total_amount: Decimal, *, fee_rate: Decimal) -> 'RefundQuote':
        total_amount = to_cents(total_amount)
        cancellation_fee = to_cents(total_amount * fee_rate)
        return cls(
            total_amount=total_amount,
            cancellation_fee=cancellation_fee,
            refund_amount=total_amount - cancellation_fee,
        )
