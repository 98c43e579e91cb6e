from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from testdesk.schemas.common import BaseSchema


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: str


class LogoutRequest(BaseModel):
    refresh_token: str


class UserSummary(BaseSchema):
    id: UUID
    email: EmailStr
    full_name: str
    mobile: str | None = None
    is_active: bool
    roles: list[str]
    last_login_at: datetime | None


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = 'bearer'
    user: UserSummary


class LoginResponse(TokenResponse):
    """Token pair plus, for candidates, the test their login has just started."""

    subject_id: UUID | None = None
    question_count: int | None = None
