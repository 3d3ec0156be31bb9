"""Account store operations."""

import base64
import logging
import math
import secrets

from sqlalchemy import or_
from sqlalchemy.orm import Session

from user_admin.models.account import Account
from user_admin.models.enums import AccountStatus, Role
from user_admin.services.auth import get_password_hash

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

THROWAWAY_PASSWORD_LENGTH = 8


class DuplicateEmailError(Exception):
    """Raised when an email is already taken by another account."""


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term only ever matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def page_count(total: int, limit: int) -> int:
    """Number of pages needed to show `total` rows, `limit` at a time."""
    return math.ceil(total / limit)


def generate_throwaway_password() -> str:
    """Random password for admin-created accounts; the owner resets it later."""
    return secrets.token_hex(THROWAWAY_PASSWORD_LENGTH // 2)


def photo_data_uri(content: bytes, content_type: str) -> str:
    """Encode an uploaded image as a data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def get_account(db: Session, account_id: str) -> Account | None:
    """Get an account by id."""
    return db.query(Account).filter(Account.id == account_id).first()


def get_account_by_email(db: Session, email: str) -> Account | None:
    """Get an account by email."""
    return db.query(Account).filter(Account.email == email).first()


def email_taken(db: Session, email: str, exclude_id: str | None = None) -> bool:
    query = db.query(Account.id).filter(Account.email == email)
    if exclude_id is not None:
        query = query.filter(Account.id != exclude_id)
    return query.first() is not None


def create_account(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: Role | None = None,
    status: AccountStatus | None = None,
    profile_photo: str | None = None,
) -> Account:
    """Create a new account.

    The email check is only a fast path; the unique index on `email` is what
    actually guarantees uniqueness, so callers must also handle IntegrityError.
    """
    if email_taken(db, email):
        raise DuplicateEmailError(email)

    account = Account(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role or Role.USER,
        status=status or AccountStatus.ACTIVE,
        profile_photo=profile_photo,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info(f"Created account {account.id} with role {account.role.value}")
    return account


def list_accounts(
    db: Session,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    role: Role | None = None,
) -> tuple[list[Account], int]:
    """Return one page of accounts and the total number of matches."""
    query = db.query(Account)

    if search:
        pattern = f"%{escape_like(search)}%"
        query = query.filter(
            or_(
                Account.name.ilike(pattern, escape=LIKE_ESCAPE),
                Account.email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    if role is not None:
        query = query.filter(Account.role == role)

    total = query.count()
    skip = (page - 1) * limit
    # Past the last row; also keeps huge offsets out of the database's integer range
    if skip >= total:
        return [], total

    accounts = query.order_by(Account.created_at, Account.id).offset(skip).limit(limit).all()
    return accounts, total


def update_account(db: Session, account: Account, changes: dict) -> Account:
    """Apply a partial update to an account."""
    new_email = changes.get("email")
    if new_email is not None and email_taken(db, new_email, exclude_id=account.id):
        raise DuplicateEmailError(new_email)

    for field, value in changes.items():
        if value is None and field in ("name", "email", "role", "status"):
            continue
        setattr(account, field, value)

    db.commit()
    db.refresh(account)
    return account


def delete_account(db: Session, account: Account) -> None:
    """Delete an account permanently."""
    account_id = account.id
    db.delete(account)
    db.commit()
    logger.info(f"Deleted account {account_id}")
