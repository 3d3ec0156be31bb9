"""SQLAlchemy models."""

from user_admin.models.account import Account
from user_admin.models.enums import AccountStatus, Role

__all__ = [
    "Account",
    "AccountStatus",
    "Role",
]
