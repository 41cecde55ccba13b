import time
from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.storefront_metrics import metrics
from src.service.ticketing.app.dto.storefront_dto import EventSearchResult
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.event_search_domain import distinct_venues, filter_events
from src.service.ticketing.domain.value_object.event_search_filter import EventSearchFilter


class ListEventsUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo, settings: Settings) -> None:
        self.event_query_repo = event_query_repo
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, settings=settings)

    @Logger.io
    async def search(
        self,
        *,
        search_filter: EventSearchFilter,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> EventSearchResult:
        """
        Filter the whole catalog in memory, then cut to ``limit``

        ``venues`` lists every venue of the catalog, not only of the matches, so the
        venue dropdown keeps its options while filters are active.
        """
        now = now or datetime.now(timezone.utc)
        limit = limit or self.settings.EVENT_LIST_DEFAULT_LIMIT

        events = await self.event_query_repo.list_events(limit=None)

        started = time.perf_counter()
        matched = filter_events(events, search_filter, now=now)
        metrics.search_duration.observe(time.perf_counter() - started)

        Logger.base.info(
            f'🔍 [SEARCH] {len(matched)}/{len(events)} events match '
            f'({search_filter.active_filter_count} active filters, sort={search_filter.sort_by})'
        )
        return EventSearchResult(
            events=matched[:limit],
            active_filter_count=search_filter.active_filter_count,
            venues=distinct_venues(events),
        )
