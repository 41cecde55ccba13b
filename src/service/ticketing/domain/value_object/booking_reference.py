"""
Human-readable booking reference

``BK`` + last 8 digits of the epoch-millisecond timestamp + 4 random
uppercase base-36 characters, e.g. ``BK12345678X9QZ``. Display aid only;
two bookings in the same millisecond may collide, the booking id is the key.
"""

import secrets
import string
import time
from typing import Optional


REFERENCE_PREFIX = 'BK'
QR_CODE_PREFIX = 'QR_'
_BASE36_ALPHABET = string.digits + string.ascii_uppercase


def generate_booking_reference(*, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    timestamp_part = str(now_ms)[-8:].rjust(8, '0')
    random_part = ''.join(secrets.choice(_BASE36_ALPHABET) for _ in range(4))
    return f'{REFERENCE_PREFIX}{timestamp_part}{random_part}'


def qr_code_for(reference: str) -> str:
    return f'{QR_CODE_PREFIX}{reference}'
