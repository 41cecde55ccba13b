import attrs

from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class SessionContext:
    """
    Authenticated principal for one request.

    Built by the HTTP auth dependency from the verified session token and passed
    explicitly into every use case; nothing reads the current user from globals.
    """

    user_id: str
    email: str
    name: str = ''
    role: UserRole = UserRole.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_access(self, owner_user_id: str) -> bool:
        return self.is_admin or self.user_id == owner_user_id

    def require_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError('Only admins can perform this action')
