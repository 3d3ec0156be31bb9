"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from user_admin.models.enums import AccountStatus, Role
from user_admin.schemas.account import PROFILE_PHOTO_ALIASES, AccountData


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    role: Role | None = None
    status: AccountStatus | None = None
    profile_photo: str | None = Field(None, validation_alias=PROFILE_PHOTO_ALIASES)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    status: str = "success"
    token: str
    data: AccountData
