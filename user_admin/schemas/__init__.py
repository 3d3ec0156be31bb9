"""Pydantic schemas for API requests and responses."""

from user_admin.schemas.account import (
    AccountCreate,
    AccountEnvelope,
    AccountListEnvelope,
    AccountResponse,
    AccountUpdate,
    MessageResponse,
)
from user_admin.schemas.auth import AuthResponse, UserLogin, UserRegister

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "AccountEnvelope",
    "AccountListEnvelope",
    "MessageResponse",
]
