"""Account schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from user_admin.models.enums import AccountStatus, Role

# The dashboard sends and reads camelCase; snake_case is accepted too
PROFILE_PHOTO_ALIASES = AliasChoices("profilePhoto", "profile_photo")


class AccountCreate(BaseModel):
    """Create an account on behalf of someone else (admin only)."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    role: Role | None = None
    status: AccountStatus | None = None
    profile_photo: str | None = Field(None, validation_alias=PROFILE_PHOTO_ALIASES)


class AccountUpdate(BaseModel):
    """Update an account. Only the fields that are sent are changed."""

    name: str | None = Field(None, min_length=2, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    role: Role | None = None
    status: AccountStatus | None = None
    profile_photo: str | None = Field(None, validation_alias=PROFILE_PHOTO_ALIASES)


class AccountResponse(BaseModel):
    """Public account representation. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    name: str
    email: str
    role: Role
    status: AccountStatus
    profile_photo: str | None = Field(
        None, validation_alias=PROFILE_PHOTO_ALIASES, serialization_alias="profilePhoto"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AccountData(BaseModel):
    user: AccountResponse


class AccountEnvelope(BaseModel):
    """Single account response."""

    status: str = "success"
    data: AccountData


class AccountListData(BaseModel):
    users: list[AccountResponse]


class AccountListEnvelope(BaseModel):
    """One page of accounts plus pagination counters."""

    status: str = "success"
    results: int
    total: int
    total_pages: int = Field(
        ...,
        validation_alias=AliasChoices("total_pages", "totalPages"),
        serialization_alias="totalPages",
    )
    current_page: int = Field(
        ...,
        validation_alias=AliasChoices("current_page", "currentPage"),
        serialization_alias="currentPage",
    )
    data: AccountListData


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
