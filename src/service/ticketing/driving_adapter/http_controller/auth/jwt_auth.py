"""
Session token verification

Tokens are issued by the identity provider and signed with the shared
``SECRET_KEY``. The service only decodes them into a ``SessionContext``.
``create_session_token`` exists for local tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import Settings, settings as default_settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.session_context import SessionContext


class JwtAuth:
    def __init__(self, *, settings: Optional[Settings] = None) -> None:
        settings = settings or default_settings
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_session_token(self, session: SessionContext) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': session.user_id,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
            'user_id': session.user_id,
            'email': session.email,
            'name': session.name,
            'role': session.role.value,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_session_from_jwt(self, token: Optional[str]) -> SessionContext:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        email = payload.get('email')
        role = payload.get('role', UserRole.CUSTOMER.value)

        if not user_id or not email:
            raise AuthenticationError('Invalid token')

        try:
            user_role = UserRole(role)
        except ValueError as e:
            raise AuthenticationError('Invalid token') from e

        # Rebuild the principal from the claims (no DB query)
        return SessionContext(
            user_id=str(user_id),
            email=email,
            name=payload.get('name') or '',
            role=user_role,
        )
