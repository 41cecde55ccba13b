"""
Ticket QR payload

The QR code printed on tickets encodes a compact JSON document scanned at the
venue entrance. Emails add the booking reference so support can look it up by
voice; the dashboard ticket omits it.
"""

from typing import Optional
from urllib.parse import quote

import orjson


QR_IMAGE_ENDPOINT = 'https://api.qrserver.com/v1/create-qr-code/'


def resolve_display_reference(*, booking_id: str, booking_reference: Optional[str]) -> str:
    return booking_reference or booking_id[-8:].upper()


def build_ticket_qr_payload(
    *,
    booking_id: str,
    event_id: int,
    seat_count: int,
    customer_email: str,
    booking_reference: Optional[str] = None,
    include_reference: bool = True,
) -> str:
    payload = {
        'bookingId': booking_id,
        'eventId': event_id,
        'seats': seat_count,
        'customerEmail': customer_email,
    }
    if include_reference:
        payload['reference'] = resolve_display_reference(
            booking_id=booking_id, booking_reference=booking_reference
        )
    return orjson.dumps(payload).decode()


def qr_image_url(payload: str, *, size: int = 250) -> str:
    return f'{QR_IMAGE_ENDPOINT}?size={size}x{size}&format=png&margin=20&data={quote(payload)}'
