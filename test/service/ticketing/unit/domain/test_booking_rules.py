"""Unit tests for booking entity, cancellation window and ticket reference rules"""

from datetime import timedelta
from decimal import Decimal
import re

import orjson
import pytest

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.cancellation_domain import (
    is_within_cancellation_window,
    time_until_event_label,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.value_object.booking_reference import (
    generate_booking_reference,
    qr_code_for,
)
from src.service.ticketing.domain.value_object.money import PriceBreakdown, RefundQuote
from src.service.ticketing.domain.value_object.ticket_qr import (
    build_ticket_qr_payload,
    resolve_display_reference,
)
from test.service.ticketing.unit.helpers import NOW, make_booking


@pytest.mark.unit
class TestBookingCreate:
    def test_create_builds_confirmed_booking(self) -> None:
        """
        Given: Two seats priced $50.00 in total
        When: Creating a booking
        Then: The booking is confirmed, paid, and its QR code embeds its reference
        """
        price = PriceBreakdown.from_seat_prices(
            [Decimal('25.00'), Decimal('25.00')], fee_rate=Decimal('0.05')
        )

        booking = Booking.create(
            user_id='user-1',
            event_id=1,
            seat_ids=[11, 12],
            price=price,
            customer_name='Alex Rivera',
            customer_email='buyer@example.com',
            now=NOW,
        )

        assert booking.booking_status == BookingStatus.CONFIRMED
        assert booking.payment_status == PaymentStatus.COMPLETED
        assert booking.total_amount == Decimal('52.50')
        assert booking.seat_count == 2
        assert booking.qr_code == f'QR_{booking.booking_reference}'
        assert booking.id.version == 7

    def test_duplicate_seats_are_rejected(self) -> None:
        price = PriceBreakdown.from_seat_prices([Decimal('10')], fee_rate=Decimal('0.05'))

        with pytest.raises(DomainError, match='Duplicate'):
            Booking.create(
                user_id='user-1',
                event_id=1,
                seat_ids=[3, 3],
                price=price,
                customer_name='Alex',
                customer_email='buyer@example.com',
            )

    def test_cancel_records_refund_and_timestamp(self) -> None:
        booking = make_booking(total_amount=Decimal('52.50'))
        refund = RefundQuote.from_total(booking.total_amount, fee_rate=Decimal('0.10'))

        cancelled = booking.cancel(refund=refund, now=NOW)

        assert cancelled.booking_status == BookingStatus.CANCELLED
        assert cancelled.refund_amount == Decimal('47.25')
        assert cancelled.cancelled_at == NOW
        assert booking.booking_status == BookingStatus.CONFIRMED

    def test_cancel_twice_is_rejected(self) -> None:
        booking = make_booking(booking_status=BookingStatus.CANCELLED)
        refund = RefundQuote.from_total(booking.total_amount, fee_rate=Decimal('0.10'))

        with pytest.raises(DomainError, match='already cancelled'):
            booking.cancel(refund=refund, now=NOW)


@pytest.mark.unit
class TestCancellationWindow:
    def test_exactly_24_hours_before_is_closed(self) -> None:
        assert not is_within_cancellation_window(NOW + timedelta(hours=24), NOW, cutoff_hours=24)

    def test_just_over_24_hours_before_is_open(self) -> None:
        event_date = NOW + timedelta(hours=24, seconds=1)

        assert is_within_cancellation_window(event_date, NOW, cutoff_hours=24)

    @pytest.mark.parametrize(
        ('delta', 'label'),
        [
            (timedelta(hours=-1), 'Event has passed'),
            (timedelta(hours=5, minutes=59), '5 hours until event'),
            (timedelta(hours=30), '1 day until event'),
            (timedelta(days=3, hours=2), '3 days until event'),
        ],
    )
    def test_time_until_event_label(self, delta: timedelta, label: str) -> None:
        assert time_until_event_label(NOW + delta, NOW) == label


@pytest.mark.unit
class TestReferences:
    def test_reference_format(self) -> None:
        reference = generate_booking_reference(now_ms=1_700_000_123_456)

        assert re.fullmatch(r'BK00123456[0-9A-Z]{4}', reference)
        assert qr_code_for(reference) == f'QR_{reference}'

    def test_display_reference_falls_back_to_id_suffix(self) -> None:
        booking_id = '0193a1b2-c3d4-7e5f-8a9b-0c1d2e3f4abc'

        assert resolve_display_reference(booking_id=booking_id, booking_reference=None) == (
            '2E3F4ABC'
        )
        assert resolve_display_reference(booking_id=booking_id, booking_reference='BK1') == 'BK1'

    def test_ticket_qr_payload_without_reference(self) -> None:
        payload = build_ticket_qr_payload(
            booking_id='b-1',
            event_id=4,
            seat_count=2,
            customer_email='buyer@example.com',
            include_reference=False,
        )

        assert orjson.loads(payload) == {
            'bookingId': 'b-1',
            'eventId': 4,
            'seats': 2,
            'customerEmail': 'buyer@example.com',
        }
