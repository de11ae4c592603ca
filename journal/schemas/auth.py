from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from journal.configs.settings import MIN_NAME_LENGTH
from journal.schemas.base import CamelModel
from journal.schemas.user import UserResponse


class Token(BaseModel):
    """Token schema for JWT access tokens."""

    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    user_id: UUID
    email: str
    jti: str
    token_type: str
    expires_at: datetime


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=MIN_NAME_LENGTH, max_length=100, examples=["Ada Lovelace"])
    email: EmailStr = Field(..., examples=["ada@example.com"])
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class SessionInfo(CamelModel):
    id: str
    expires_at: datetime


class SessionResponse(CamelModel):
    """The resolved ``{user, session}`` pair for the current request."""

    user: UserResponse
    session: SessionInfo


class LoginResponse(Token):
    """Bearer token plus the signed-in user."""

    user: UserResponse
