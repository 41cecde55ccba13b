from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from src.service.ticketing.domain.value_object.event_search_filter import (
    ALL,
    DateRange,
    EventSearchFilter,
    PriceRange,
    SortKey,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventListResponse,
    EventResponse,
    SeatResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=EventListResponse)
@Logger.io
async def list_events(
    query: str = '',
    category: str = ALL,
    price_range: PriceRange = PriceRange.ALL,
    date_range: DateRange = DateRange.ALL,
    venue: str = ALL,
    sort_by: SortKey = SortKey.DATE,
    limit: Optional[int] = Query(None, ge=1, le=500),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventListResponse:
    search_filter = EventSearchFilter(
        query=query,
        category=category,
        price_range=price_range,
        date_range=date_range,
        venue=venue,
        sort_by=sort_by,
    )
    with tracer.start_as_current_span('controller.list_events') as span:
        span.set_attribute('filter.active_count', search_filter.active_filter_count)
        result = await use_case.search(search_filter=search_filter, limit=limit)

    return EventListResponse(
        events=[EventResponse.from_entity(event) for event in result.events],
        active_filter_count=result.active_filter_count,
        venues=result.venues,
    )


@router.get('/{event_id}', response_model=EventResponse)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_event(event_id=event_id)
    return EventResponse.from_entity(event)


@router.get('/{event_id}/seats', response_model=List[SeatResponse])
@Logger.io
async def list_event_seats(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> List[SeatResponse]:
    seats = await use_case.list_seats(event_id=event_id)
    return [SeatResponse.from_entity(seat) for seat in seats]
