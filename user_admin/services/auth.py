"""Authentication service for JWT and password handling."""

import logging
from collections.abc import Collection
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from user_admin.config import Settings, get_settings
from user_admin.models.account import Account
from user_admin.models.enums import Role

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class TokenIssuer:
    """Signs and verifies access tokens that embed an account id.

    The issuer is built once from settings at startup; a missing secret is
    a configuration error, not a per-request failure.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta | None = None):
        if not secret:
            raise ValueError("JWT secret is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self.expires_in = expires_in or timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(minutes=settings.jwt_expiration_minutes),
        )

    def issue(self, account_id: str, now: datetime | None = None) -> str:
        """Create a signed token for the given account."""
        issued_at = now or datetime.now(UTC)
        to_encode = {
            "sub": account_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str | None:
        """Return the account id carried by a valid token, or None.

        The reason a token was rejected is logged here and never surfaced to callers.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except JWTError as e:
            logger.warning(f"Rejected invalid token: {e}")
            return None

        account_id = payload.get("sub")
        if not isinstance(account_id, str) or not account_id:
            logger.warning("Rejected token without a subject")
            return None
        return account_id


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get the token issuer built from the cached settings."""
    return TokenIssuer.from_settings(get_settings())


def role_permitted(role: Role, allowed: Collection[Role]) -> bool:
    """Check whether a role belongs to the set permitted for a route group."""
    return role in allowed


def authenticate_user(db: Session, email: str, password: str) -> Account | None:
    """Authenticate an account by email and password."""
    account = db.query(Account).filter(Account.email == email).first()
    if not account:
        return None
    if not verify_password(password, account.password_hash):
        return None
    return account
