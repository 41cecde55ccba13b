from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ticketing.app.query.dashboard_use_case import DashboardUseCase
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.driving_adapter.http_controller.auth.session_auth import (
    get_session_context,
)
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingDetailResponse,
    BookingResponse,
    BookingWithEventResponse,
    CancellationQuoteResponse,
    MyBookingsResponse,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
    SeatResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED, response_model=BookingResponse)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    session: SessionContext = Depends(get_session_context),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('seat_count', len(request.seat_ids))
        span.set_attribute('user_id', session.user_id)

        booking = await use_case.create_booking(
            session=session,
            event_id=request.event_id,
            seat_ids=request.seat_ids,
            customer_name=request.customer_name,
            customer_email=str(request.customer_email),
            customer_phone=request.customer_phone,
            payment_method=request.payment_method,
        )
        span.set_attribute('booking.id', str(booking.id))

        return BookingResponse.from_entity(booking)


@router.get('/my_booking', response_model=MyBookingsResponse)
@Logger.io
async def list_my_bookings(
    session: SessionContext = Depends(get_session_context),
    use_case: DashboardUseCase = Depends(DashboardUseCase.depends),
) -> MyBookingsResponse:
    dashboard = await use_case.get_user_dashboard(session=session)
    return MyBookingsResponse(
        bookings=[
            BookingWithEventResponse(
                booking=BookingResponse.from_entity(entry.booking),
                event=EventResponse.from_entity(entry.event) if entry.event else None,
                is_upcoming=entry.is_upcoming,
            )
            for entry in dashboard.bookings
        ],
        total_bookings=dashboard.total_bookings,
        upcoming_bookings=dashboard.upcoming_bookings,
        total_spent=dashboard.total_spent,
    )


@router.get('/{booking_id}', response_model=BookingDetailResponse)
@Logger.io
async def get_booking(
    booking_id: UUID,
    session: SessionContext = Depends(get_session_context),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_booking_detail(session=session, booking_id=booking_id)
    return BookingDetailResponse(
        booking=BookingResponse.from_entity(detail.booking),
        event=EventResponse.from_entity(detail.event) if detail.event else None,
        seats=[SeatResponse.from_entity(seat) for seat in detail.seats],
    )


@router.get('/{booking_id}/cancellation', response_model=CancellationQuoteResponse)
@Logger.io
async def get_cancellation_quote(
    booking_id: UUID,
    session: SessionContext = Depends(get_session_context),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> CancellationQuoteResponse:
    quote = await use_case.get_cancellation_quote(session=session, booking_id=booking_id)
    return CancellationQuoteResponse(
        booking_id=quote.booking_id,
        can_cancel=quote.can_cancel,
        hours_until_event=quote.hours_until_event,
        time_label=quote.time_label,
        total_amount=quote.total_amount,
        cancellation_fee=quote.cancellation_fee,
        refund_amount=quote.refund_amount,
        reason=quote.reason,
    )


@router.patch('/{booking_id}/cancel', response_model=BookingResponse)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    session: SessionContext = Depends(get_session_context),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.cancel_booking') as span:
        span.set_attribute('booking.id', str(booking_id))
        booking = await use_case.cancel_booking(session=session, booking_id=booking_id)
        return BookingResponse.from_entity(booking)


@router.get('/{booking_id}/ticket', response_class=PlainTextResponse)
@Logger.io
async def download_ticket(
    booking_id: UUID,
    session: SessionContext = Depends(get_session_context),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> PlainTextResponse:
    filename, content = await use_case.download_ticket(session=session, booking_id=booking_id)
    return PlainTextResponse(
        content=content,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )
