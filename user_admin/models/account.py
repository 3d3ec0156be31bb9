"""Account model."""

import uuid

from sqlalchemy import Column, Enum, String, Text

from user_admin.database import Base
from user_admin.models.enums import AccountStatus, Role
from user_admin.models.mixins import TimestampMixin


def _new_account_id() -> str:
    return uuid.uuid4().hex


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Account(Base, TimestampMixin):
    """A user account managed through the admin dashboard."""

    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, default=_new_account_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="account_role", values_callable=_enum_values),
        nullable=False,
        default=Role.USER,
    )
    status = Column(
        Enum(AccountStatus, name="account_status", values_callable=_enum_values),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )
    # Inline data URI or external URL
    profile_photo = Column(Text, nullable=True)
