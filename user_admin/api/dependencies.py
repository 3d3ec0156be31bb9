"""FastAPI dependencies for authentication and authorization."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from user_admin.config import get_settings
from user_admin.database import get_db
from user_admin.models.account import Account
from user_admin.models.enums import Role
from user_admin.services.accounts import get_account
from user_admin.services.auth import TokenIssuer, get_token_issuer, role_permitted

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized to access this route",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Find the access token: bearer header first, then the auth cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().cookie_name) or None


def get_current_account(
    token: Annotated[str | None, Depends(get_request_token)],
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Account:
    """Get the account the request is authenticated as."""
    if token is None:
        raise _unauthorized()

    account_id = issuer.verify(token)
    if account_id is None:
        raise _unauthorized()

    account = get_account(db, account_id)
    if account is None:
        logger.warning(f"Token references missing account {account_id}")
        raise _unauthorized()

    return account


def require_roles(*roles: Role):
    """Build a dependency that admits only accounts holding one of `roles`."""
    allowed = frozenset(roles)

    def check_role(
        current_account: Annotated[Account, Depends(get_current_account)],
    ) -> Account:
        if not role_permitted(current_account.role, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return current_account

    return check_role


require_admin = require_roles(Role.ADMIN)
