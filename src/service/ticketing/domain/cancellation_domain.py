"""
Cancellation Policy
A booking can be cancelled strictly more than the cutoff before the event
starts; at exactly the cutoff the window is already closed.
"""

import math
from datetime import datetime


def hours_until(event_date: datetime, now: datetime) -> float:
    return (event_date - now).total_seconds() / 3600


def is_within_cancellation_window(
    event_date: datetime, now: datetime, *, cutoff_hours: int
) -> bool:
    return hours_until(event_date, now) > cutoff_hours


def time_until_event_label(event_date: datetime, now: datetime) -> str:
    whole_hours = math.floor(hours_until(event_date, now))
    if whole_hours < 0:
        return 'Event has passed'
    if whole_hours < 24:
        return f'{whole_hours} hours until event'
    days = whole_hours // 24
    return f'{days} day{"s" if days > 1 else ""} until event'
