from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.send_welcome_email_use_case import SendWelcomeEmailUseCase
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.driving_adapter.http_controller.auth.session_auth import (
    get_session_context,
)
from src.service.ticketing.driving_adapter.http_controller.schema.user_schema import (
    SessionResponse,
    WelcomeEmailResponse,
)


router = APIRouter()


@router.get('/me', response_model=SessionResponse)
async def get_me(session: SessionContext = Depends(get_session_context)) -> SessionResponse:
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        name=session.name,
        role=session.role,
        is_admin=session.is_admin,
    )


@router.post('/welcome', status_code=status.HTTP_202_ACCEPTED, response_model=WelcomeEmailResponse)
@Logger.io
async def send_welcome_email(
    session: SessionContext = Depends(get_session_context),
    use_case: SendWelcomeEmailUseCase = Depends(SendWelcomeEmailUseCase.depends),
) -> WelcomeEmailResponse:
    enqueued = await use_case.send_welcome(session=session)
    return WelcomeEmailResponse(enqueued=enqueued)
