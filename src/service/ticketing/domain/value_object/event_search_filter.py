from enum import StrEnum

import attrs


ALL = 'all'


class PriceRange(StrEnum):
    ALL = 'all'
    UNDER_25 = 'under-25'
    FROM_25_TO_50 = '25-50'
    FROM_50_TO_100 = '50-100'
    OVER_100 = 'over-100'


class DateRange(StrEnum):
    ALL = 'all'
    TODAY = 'today'
    THIS_WEEK = 'this-week'
    THIS_MONTH = 'this-month'
    NEXT_MONTH = 'next-month'


class SortKey(StrEnum):
    DATE = 'date'
    PRICE_LOW = 'price-low'
    PRICE_HIGH = 'price-high'
    TITLE = 'title'
    POPULARITY = 'popularity'


@attrs.define(frozen=True)
class EventSearchFilter:
    """Filter state of the search panel; ``all`` disables a dimension."""

    query: str = ''
    category: str = ALL
    price_range: PriceRange = PriceRange.ALL
    date_range: DateRange = DateRange.ALL
    venue: str = ALL
    sort_by: SortKey = SortKey.DATE

    @property
    def active_filter_count(self) -> int:
        count = 0
        if self.query.strip():
            count += 1
        if self.category != ALL:
            count += 1
        if self.price_range != PriceRange.ALL:
            count += 1
        if self.date_range != DateRange.ALL:
            count += 1
        if self.venue != ALL:
            count += 1
        return count
