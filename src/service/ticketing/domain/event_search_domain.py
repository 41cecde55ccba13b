"""
Event Search Domain
Pure filter and sort pipeline over the event catalog - no datastore access.

Calendar brackets (today / this-month / next-month) are evaluated in the
timezone of ``now``.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Iterable, List

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.value_object.event_search_filter import (
    ALL,
    DateRange,
    EventSearchFilter,
    PriceRange,
    SortKey,
)


EventPredicate = Callable[[EventEntity], bool]

_TWENTY_FIVE = Decimal('25')
_FIFTY = Decimal('50')
_ONE_HUNDRED = Decimal('100')


def _matches_query(event: EventEntity, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    haystacks = (event.title, event.description or '', event.venue_name)
    return any(needle in text.lower() for text in haystacks)


def _matches_price(event: EventEntity, price_range: PriceRange) -> bool:
    price = event.base_price
    if price_range == PriceRange.UNDER_25:
        return price < _TWENTY_FIVE
    if price_range == PriceRange.FROM_25_TO_50:
        return _TWENTY_FIVE <= price <= _FIFTY
    if price_range == PriceRange.FROM_50_TO_100:
        return _FIFTY <= price <= _ONE_HUNDRED
    if price_range == PriceRange.OVER_100:
        return price > _ONE_HUNDRED
    return True


def _first_of_month(moment: datetime, months_ahead: int) -> datetime:
    month_index = moment.month - 1 + months_ahead
    return moment.replace(
        year=moment.year + month_index // 12,
        month=month_index % 12 + 1,
        day=1,
        hour=0,
        minute=0,
        second=0,
        microsecond=0,
    )


def _matches_date(event: EventEntity, date_range: DateRange, now: datetime) -> bool:
    if date_range == DateRange.ALL:
        return True

    event_date = event.event_date.astimezone(now.tzinfo) if now.tzinfo else event.event_date
    if date_range == DateRange.TODAY:
        return event_date.date() == now.date()
    if date_range == DateRange.THIS_WEEK:
        return now <= event_date <= now + timedelta(days=7)
    if date_range == DateRange.THIS_MONTH:
        return (event_date.year, event_date.month) == (now.year, now.month)
    if date_range == DateRange.NEXT_MONTH:
        return _first_of_month(now, 1) <= event_date < _first_of_month(now, 2)
    return True


def build_predicates(search_filter: EventSearchFilter, *, now: datetime) -> List[EventPredicate]:
    predicates: List[EventPredicate] = []
    if search_filter.query.strip():
        predicates.append(lambda e: _matches_query(e, search_filter.query))
    if search_filter.category != ALL:
        predicates.append(lambda e: e.category == search_filter.category)
    if search_filter.price_range != PriceRange.ALL:
        predicates.append(lambda e: _matches_price(e, search_filter.price_range))
    if search_filter.date_range != DateRange.ALL:
        predicates.append(lambda e: _matches_date(e, search_filter.date_range, now))
    if search_filter.venue != ALL:
        predicates.append(lambda e: e.venue_name == search_filter.venue)
    return predicates


def sort_events(events: Iterable[EventEntity], sort_by: SortKey) -> List[EventEntity]:
    # sorted() is stable, ties keep their input order
    if sort_by == SortKey.PRICE_LOW:
        return sorted(events, key=lambda e: e.base_price)
    if sort_by == SortKey.PRICE_HIGH:
        return sorted(events, key=lambda e: e.base_price, reverse=True)
    if sort_by == SortKey.TITLE:
        return sorted(events, key=lambda e: e.title.casefold())
    if sort_by == SortKey.POPULARITY:
        return sorted(events, key=lambda e: e.sold_seats, reverse=True)
    return sorted(events, key=lambda e: e.event_date)


def filter_events(
    events: Iterable[EventEntity], search_filter: EventSearchFilter, *, now: datetime
) -> List[EventEntity]:
    """
    Apply every active predicate of ``search_filter`` and sort the survivors.

    The input is never mutated; the same input and filter always yield the same list.
    """
    predicates = build_predicates(search_filter, now=now)
    matched = [event for event in events if all(predicate(event) for predicate in predicates)]
    return sort_events(matched, search_filter.sort_by)


def distinct_venues(events: Iterable[EventEntity]) -> List[str]:
    return sorted({event.venue_name for event in events})
