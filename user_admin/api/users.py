"""User account API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_admin.api.dependencies import get_current_account, require_admin
from user_admin.api.payloads import account_create_payload, account_update_payload
from user_admin.config import Settings, get_settings
from user_admin.database import get_db
from user_admin.models.account import Account
from user_admin.models.enums import Role
from user_admin.schemas.account import (
    AccountCreate,
    AccountData,
    AccountEnvelope,
    AccountListData,
    AccountListEnvelope,
    AccountResponse,
    AccountUpdate,
    MessageResponse,
)
from user_admin.schemas.auth import AuthResponse, UserLogin, UserRegister
from user_admin.services.accounts import (
    DuplicateEmailError,
    create_account,
    delete_account,
    generate_throwaway_password,
    get_account,
    list_accounts,
    page_count,
    update_account,
)
from user_admin.services.auth import TokenIssuer, authenticate_user, get_token_issuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _conflict() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")


def _envelope(account: Account) -> AccountEnvelope:
    return AccountEnvelope(data=AccountData(user=AccountResponse.model_validate(account)))


def get_account_or_404(db: Session, account_id: str) -> Account:
    """Get an account by id or fail with 404."""
    account = get_account(db, account_id)
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return account


# Public routes


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
):
    """Register a new account."""
    try:
        account = create_account(
            db,
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            role=user_data.role,
            status=user_data.status,
            profile_photo=user_data.profile_photo,
        )
    except DuplicateEmailError:
        raise _conflict() from None
    except IntegrityError:
        db.rollback()
        raise _conflict() from None

    return AuthResponse(
        token=issuer.issue(account.id),
        data=AccountData(user=AccountResponse.model_validate(account)),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password. The token is also set as an httpOnly cookie."""
    account = authenticate_user(db, credentials.email, credentials.password)

    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = issuer.issue(account.id)
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=int(issuer.expires_in.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

    return AuthResponse(
        token=token,
        data=AccountData(user=AccountResponse.model_validate(account)),
    )


@router.get("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout by overwriting the auth cookie with a short-lived placeholder."""
    response.set_cookie(
        key=settings.cookie_name,
        value="none",
        max_age=10,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return MessageResponse(message="Logged out successfully")


# Authenticated routes


@router.get("", response_model=AccountListEnvelope)
def get_users(
    current_account: Annotated[Account, Depends(get_current_account)],
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: str | None = Query(default=None, max_length=255),
    role: Role | None = Query(default=None),
):
    """List accounts, optionally filtered by a name/email search term and a role."""
    term = search.strip() if search else None
    accounts, total = list_accounts(db, page=page, limit=limit, search=term, role=role)

    return AccountListEnvelope(
        results=len(accounts),
        total=total,
        total_pages=page_count(total, limit),
        current_page=page,
        data=AccountListData(users=[AccountResponse.model_validate(a) for a in accounts]),
    )


@router.get("/me", response_model=AccountEnvelope)
def get_me(
    current_account: Annotated[Account, Depends(get_current_account)],
):
    """Get the account the caller is logged in as."""
    return _envelope(current_account)


@router.get("/{account_id}", response_model=AccountEnvelope)
def get_user(
    account_id: str,
    current_account: Annotated[Account, Depends(get_current_account)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single account."""
    return _envelope(get_account_or_404(db, account_id))


# Admin routes


@router.post("", response_model=AccountEnvelope, status_code=status.HTTP_201_CREATED)
def create_user(
    current_account: Annotated[Account, Depends(require_admin)],
    payload: Annotated[AccountCreate, Depends(account_create_payload)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create an account with a random throwaway password.

    Accepts JSON or a multipart form with an optional `profile_photo` image.
    """
    try:
        account = create_account(
            db,
            name=payload.name,
            email=payload.email,
            password=generate_throwaway_password(),
            role=payload.role,
            status=payload.status,
            profile_photo=payload.profile_photo,
        )
    except DuplicateEmailError:
        raise _conflict() from None
    except IntegrityError:
        db.rollback()
        raise _conflict() from None

    logger.info(f"Account {account.id} created by admin {current_account.id}")
    return _envelope(account)


@router.patch("/{account_id}", response_model=AccountEnvelope)
def update_user(
    account_id: str,
    current_account: Annotated[Account, Depends(require_admin)],
    payload: Annotated[AccountUpdate, Depends(account_update_payload)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update any subset of an account's name, email, role, status and photo."""
    account = get_account_or_404(db, account_id)

    try:
        account = update_account(db, account, payload.model_dump(exclude_unset=True))
    except DuplicateEmailError:
        raise _conflict() from None
    except IntegrityError:
        db.rollback()
        raise _conflict() from None

    return _envelope(account)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    account_id: str,
    current_account: Annotated[Account, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an account permanently."""
    account = get_account_or_404(db, account_id)
    delete_account(db, account)
