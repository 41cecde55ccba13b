from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.storefront_dto import (
    AdminDashboard,
    BookingWithEvent,
    UserDashboard,
)
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.value_object.session_context import SessionContext


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class DashboardUseCase:
    """
    User and admin dashboards

    Money totals count what the storefront keeps: full totals of live bookings
    plus the cancellation fee of cancelled ones.
    """

    def __init__(
        self, *, booking_query_repo: IBookingQueryRepo, event_query_repo: IEventQueryRepo
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, event_query_repo=event_query_repo)

    @Logger.io
    async def get_user_dashboard(
        self, *, session: SessionContext, now: Optional[datetime] = None
    ) -> UserDashboard:
        now = now or datetime.now(timezone.utc)
        bookings = await self.booking_query_repo.list_by_user(user_id=session.user_id)
        events = await self.event_query_repo.list_by_ids(
            event_ids={booking.event_id for booking in bookings}
        )
        events_by_id = {event.id: event for event in events}

        entries = []
        for booking in bookings:
            event = events_by_id.get(booking.event_id)
            entries.append(
                BookingWithEvent(
                    booking=booking,
                    event=event,
                    is_upcoming=bool(event and event.is_upcoming(now)),
                )
            )

        return UserDashboard(
            bookings=entries,
            total_bookings=len(bookings),
            upcoming_bookings=sum(
                1 for entry in entries if entry.is_upcoming and not entry.booking.is_cancelled
            ),
            total_spent=sum((booking.total_amount for booking in bookings), Decimal('0.00')),
        )

    @Logger.io
    async def get_admin_dashboard(
        self, *, session: SessionContext, now: Optional[datetime] = None
    ) -> AdminDashboard:
        session.require_admin()
        now = now or datetime.now(timezone.utc)

        events = await self.event_query_repo.list_events(limit=None)
        bookings = await self.booking_query_repo.list_recent(limit=None)
        events_newest_first = sorted(
            events, key=lambda event: event.created_at or _EPOCH, reverse=True
        )

        return AdminDashboard(
            events=events_newest_first,
            bookings=bookings,
            total_events=len(events),
            total_bookings=len(bookings),
            total_revenue=sum(
                (booking.total_amount for booking in bookings), Decimal('0.00')
            ),
            upcoming_events=sum(1 for event in events if event.is_upcoming(now)),
        )
