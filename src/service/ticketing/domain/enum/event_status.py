"""
Event Catalog Enums - Domain Value Objects
"""

from enum import StrEnum


class EventCategory(StrEnum):
    MOVIE = 'movie'
    CONCERT = 'concert'
    SPORTS = 'sports'
    THEATER = 'theater'


class EventStatus(StrEnum):
    ACTIVE = 'active'
    CANCELLED = 'cancelled'
    SOLD_OUT = 'sold_out'
