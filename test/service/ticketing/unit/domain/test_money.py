"""Unit tests for booking and refund money rules (cent-exact, half-up rounding)"""

from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.value_object.money import PriceBreakdown, RefundQuote, to_cents


FEE_RATE = Decimal('0.05')
CANCELLATION_RATE = Decimal('0.10')


@pytest.mark.unit
class TestPriceBreakdown:
    def test_two_seats_at_25(self) -> None:
        """
        Given: Two seats priced $25.00 each
        When: Pricing the selection with a 5% booking fee
        Then: Subtotal is $50.00, fee $2.50, total $52.50
        """
        price = PriceBreakdown.from_seat_prices(
            [Decimal('25.00'), Decimal('25.00')], fee_rate=FEE_RATE
        )

        assert price.subtotal == Decimal('50.00')
        assert price.booking_fee == Decimal('2.50')
        assert price.total == Decimal('52.50')

    def test_fee_rounds_half_up_to_the_cent(self) -> None:
        """
        Given: A seat at $12.50 (5% is 0.625)
        When: Pricing the selection
        Then: The fee rounds half-up to $0.63
        """
        price = PriceBreakdown.from_seat_prices([Decimal('12.50')], fee_rate=FEE_RATE)

        assert price.booking_fee == Decimal('0.63')
        assert price.total == Decimal('13.13')

    def test_total_is_always_subtotal_plus_fee(self) -> None:
        prices = [Decimal('33.33'), Decimal('66.67'), Decimal('0.01')]

        price = PriceBreakdown.from_seat_prices(prices, fee_rate=FEE_RATE)

        assert price.total == price.subtotal + price.booking_fee
        assert price.subtotal == Decimal('100.01')

    def test_empty_selection_is_rejected(self) -> None:
        with pytest.raises(DomainError, match='At least one seat'):
            PriceBreakdown.from_seat_prices([], fee_rate=FEE_RATE)

    def test_negative_price_is_rejected(self) -> None:
        with pytest.raises(DomainError, match='negative'):
            PriceBreakdown.from_seat_prices([Decimal('-1.00')], fee_rate=FEE_RATE)


@pytest.mark.unit
class TestRefundQuote:
    def test_refund_keeps_ten_percent(self) -> None:
        """
        Given: A booking total of $52.50
        When: Quoting a cancellation with a 10% fee
        Then: Fee is $5.25 and the refund is $47.25
        """
        quote = RefundQuote.from_total(Decimal('52.50'), fee_rate=CANCELLATION_RATE)

        assert quote.cancellation_fee == Decimal('5.25')
        assert quote.refund_amount == Decimal('47.25')
        assert quote.refund_amount + quote.cancellation_fee == quote.total_amount

    def test_zero_total_refunds_nothing(self) -> None:
        quote = RefundQuote.from_total(Decimal('0'), fee_rate=CANCELLATION_RATE)

        assert quote.cancellation_fee == Decimal('0.00')
        assert quote.refund_amount == Decimal('0.00')


@pytest.mark.unit
@pytest.mark.parametrize(
    ('amount', 'expected'),
    [('0.005', '0.01'), ('0.004', '0.00'), ('2.675', '2.68'), (10, '10.00')],
)
def test_to_cents_rounds_half_up(amount: str | int, expected: str) -> None:
    assert to_cents(amount) == Decimal(expected)
