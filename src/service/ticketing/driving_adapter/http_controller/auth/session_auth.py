from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


@inject
async def get_session_context(
    authorization: Optional[str] = Header(None),
    session_cookie: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> SessionContext:
    """Principal from the ``Authorization: Bearer`` header, falling back to the session cookie"""
    return jwt_auth.get_session_from_jwt(_bearer_token(authorization) or session_cookie)


async def require_admin(
    session: SessionContext = Depends(get_session_context),
) -> SessionContext:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={'user.id': session.user_id, 'user.role': session.role.value},
    ):
        session.require_admin()
        return session
