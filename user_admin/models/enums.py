"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    USER = "user"


class AccountStatus(str, Enum):
    """Account lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
