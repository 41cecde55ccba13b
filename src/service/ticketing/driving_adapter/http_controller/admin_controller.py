from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.enqueue_event_reminders_use_case import (
    EnqueueEventRemindersUseCase,
)
from src.service.ticketing.app.query.dashboard_use_case import DashboardUseCase
from src.service.ticketing.domain.enum.notification_type import ReminderType
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.driving_adapter.http_controller.auth.session_auth import (
    require_admin,
)
from src.service.ticketing.driving_adapter.http_controller.schema.admin_schema import (
    AdminDashboardResponse,
    AdminStats,
    ReminderEnqueueResponse,
)
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
)


router = APIRouter()


@router.get('/dashboard', response_model=AdminDashboardResponse)
@Logger.io
async def get_admin_dashboard(
    session: SessionContext = Depends(require_admin),
    use_case: DashboardUseCase = Depends(DashboardUseCase.depends),
) -> AdminDashboardResponse:
    dashboard = await use_case.get_admin_dashboard(session=session)
    return AdminDashboardResponse(
        stats=AdminStats(
            total_events=dashboard.total_events,
            total_bookings=dashboard.total_bookings,
            total_revenue=dashboard.total_revenue,
            upcoming_events=dashboard.upcoming_events,
        ),
        events=[EventResponse.from_entity(event) for event in dashboard.events],
        bookings=[BookingResponse.from_entity(booking) for booking in dashboard.bookings],
    )


@router.post(
    '/reminders', status_code=status.HTTP_202_ACCEPTED, response_model=ReminderEnqueueResponse
)
@Logger.io
async def enqueue_reminders(
    session: SessionContext = Depends(require_admin),
    use_case: EnqueueEventRemindersUseCase = Depends(EnqueueEventRemindersUseCase.depends),
) -> ReminderEnqueueResponse:
    counts = await use_case.enqueue_all()
    Logger.base.info(f'⏰ [ADMIN] Reminders triggered by {session.user_id}: {counts}')
    return ReminderEnqueueResponse(
        day_before=counts.get(ReminderType.DAY_BEFORE, 0),
        hour_before=counts.get(ReminderType.HOUR_BEFORE, 0),
    )
