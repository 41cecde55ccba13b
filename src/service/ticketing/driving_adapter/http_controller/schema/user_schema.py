from pydantic import BaseModel

from src.service.ticketing.domain.enum.user_role import UserRole


class SessionResponse(BaseModel):
    user_id: str
    email: str
    name: str
    role: UserRole
    is_admin: bool


class WelcomeEmailResponse(BaseModel):
    enqueued: bool
