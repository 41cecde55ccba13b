"""
Unit tests for the event search pipeline

The pipeline is pure: same catalog and filter always produce the same result,
and the input list is never mutated.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.service.ticketing.domain.enum.event_status import EventCategory
from src.service.ticketing.domain.event_search_domain import distinct_venues, filter_events
from src.service.ticketing.domain.value_object.event_search_filter import (
    DateRange,
    EventSearchFilter,
    PriceRange,
    SortKey,
)
from test.service.ticketing.unit.helpers import NOW, make_event


@pytest.fixture
def catalog():
    return [
        make_event(
            id=1,
            title='Jazz Night',
            category=EventCategory.CONCERT,
            venue_name='Blue Note Hall',
            base_price=Decimal('30.00'),
            event_date=NOW + timedelta(days=10),
            total_seats=50,
            available_seats=10,
        ),
        make_event(
            id=2,
            title='Rock Legends Live',
            category=EventCategory.CONCERT,
            venue_name='Stadium One',
            base_price=Decimal('85.00'),
            event_date=NOW + timedelta(days=2),
            total_seats=50,
            available_seats=45,
        ),
        make_event(
            id=3,
            title='Midnight Premiere',
            category=EventCategory.MOVIE,
            venue_name='Grand Cinema',
            base_price=Decimal('15.00'),
            event_date=NOW + timedelta(hours=3),
            description='Season blockbuster with jazz soundtrack',
        ),
        make_event(
            id=4,
            title='Summer Music Festival',
            category=EventCategory.CONCERT,
            venue_name='Central Park Arena',
            base_price=Decimal('50.00'),
            event_date=NOW + timedelta(days=40),
            total_seats=50,
            available_seats=0,
        ),
        make_event(
            id=5,
            title='Basketball Finals',
            category=EventCategory.SPORTS,
            venue_name='Stadium One',
            base_price=Decimal('120.00'),
            event_date=NOW + timedelta(days=5),
        ),
    ]


def _ids(events) -> list[int]:
    return [event.id for event in events]


@pytest.mark.unit
class TestFilterEvents:
    def test_all_filters_disabled_returns_whole_catalog_by_date(self, catalog) -> None:
        """
        Given: A filter where every dimension is 'all'
        When: Filtering the catalog
        Then: Every event is returned, soonest first
        """
        result = filter_events(catalog, EventSearchFilter(), now=NOW)

        assert _ids(result) == [3, 2, 5, 1, 4]

    def test_concert_between_25_and_50(self, catalog) -> None:
        """
        Given: category=concert and price range 25-50
        When: Filtering the catalog
        Then: Only concerts priced within [25, 50] (inclusive) remain
        """
        search_filter = EventSearchFilter(
            category='concert', price_range=PriceRange.FROM_25_TO_50
        )

        result = filter_events(catalog, search_filter, now=NOW)

        assert _ids(result) == [1, 4]
        assert search_filter.active_filter_count == 2

    def test_query_matches_title_description_or_venue_case_insensitive(self, catalog) -> None:
        result = filter_events(catalog, EventSearchFilter(query='  JAZZ '), now=NOW)

        assert _ids(result) == [3, 1]

    def test_venue_filter_is_exact(self, catalog) -> None:
        result = filter_events(catalog, EventSearchFilter(venue='Stadium One'), now=NOW)

        assert _ids(result) == [2, 5]

    def test_price_boundaries(self, catalog) -> None:
        under_25 = filter_events(
            catalog, EventSearchFilter(price_range=PriceRange.UNDER_25), now=NOW
        )
        fifty_to_hundred = filter_events(
            catalog, EventSearchFilter(price_range=PriceRange.FROM_50_TO_100), now=NOW
        )
        over_100 = filter_events(
            catalog, EventSearchFilter(price_range=PriceRange.OVER_100), now=NOW
        )

        assert _ids(under_25) == [3]
        assert _ids(fifty_to_hundred) == [2, 4]
        assert _ids(over_100) == [5]

    def test_date_ranges(self, catalog) -> None:
        today = filter_events(catalog, EventSearchFilter(date_range=DateRange.TODAY), now=NOW)
        this_week = filter_events(
            catalog, EventSearchFilter(date_range=DateRange.THIS_WEEK), now=NOW
        )
        this_month = filter_events(
            catalog, EventSearchFilter(date_range=DateRange.THIS_MONTH), now=NOW
        )
        next_month = filter_events(
            catalog, EventSearchFilter(date_range=DateRange.NEXT_MONTH), now=NOW
        )

        assert _ids(today) == [3]
        assert _ids(this_week) == [3, 2, 5]
        assert _ids(this_month) == [3, 2, 5, 1]
        assert _ids(next_month) == [4]

    def test_next_month_rolls_over_the_year(self) -> None:
        december = datetime(2025, 12, 20, tzinfo=timezone.utc)
        january_event = make_event(id=9, event_date=datetime(2026, 1, 15, tzinfo=timezone.utc))

        result = filter_events(
            [january_event], EventSearchFilter(date_range=DateRange.NEXT_MONTH), now=december
        )

        assert _ids(result) == [9]

    def test_same_input_gives_same_output_and_input_is_untouched(self, catalog) -> None:
        search_filter = EventSearchFilter(category='concert', sort_by=SortKey.PRICE_HIGH)
        original_order = _ids(catalog)

        first = filter_events(catalog, search_filter, now=NOW)
        second = filter_events(catalog, search_filter, now=NOW)

        assert _ids(first) == _ids(second) == [2, 4, 1]
        assert _ids(catalog) == original_order


@pytest.mark.unit
class TestSortEvents:
    @pytest.mark.parametrize(
        ('sort_by', 'expected'),
        [
            (SortKey.DATE, [3, 2, 5, 1, 4]),
            (SortKey.PRICE_LOW, [3, 1, 4, 2, 5]),
            (SortKey.PRICE_HIGH, [5, 2, 4, 1, 3]),
            (SortKey.TITLE, [5, 1, 3, 2, 4]),
            (SortKey.POPULARITY, [4, 1, 2, 3, 5]),
        ],
    )
    def test_sort_keys(self, catalog, sort_by: SortKey, expected: list[int]) -> None:
        result = filter_events(catalog, EventSearchFilter(sort_by=sort_by), now=NOW)

        assert _ids(result) == expected


@pytest.mark.unit
def test_distinct_venues_are_sorted_and_unique(catalog) -> None:
    assert distinct_venues(catalog) == [
        'Blue Note Hall',
        'Central Park Arena',
        'Grand Cinema',
        'Stadium One',
    ]
    unordered = [make_event(venue_name='Zeta Hall'), make_event(venue_name='Arena')]
    assert distinct_venues(unordered) == ['Arena', 'Zeta Hall']


@pytest.mark.unit
def test_active_filter_count_ignores_blank_query_and_sort() -> None:
    search_filter = EventSearchFilter(query='   ', sort_by=SortKey.TITLE, venue='Grand Cinema')

    assert search_filter.active_filter_count == 1
