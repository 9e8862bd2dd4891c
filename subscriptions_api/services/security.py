"""Password hashing and session token primitives."""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from subscriptions_api.config import get_settings

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    Returns False for an empty or unrecognised hash instead of raising.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


class TokenError(Exception):
    """A bearer token could not be accepted."""


class TokenExpiredError(TokenError):
    """Signature is valid but the token is past its expiry."""


class TokenInvalidError(TokenError):
    """Token is malformed, tampered with, or carries no usable subject."""


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters, fixed at startup."""

    secret: str
    algorithm: str = "HS256"
    lifetime: timedelta = timedelta(days=7)
    remember_me_lifetime: timedelta = timedelta(days=30)

    @classmethod
    def from_settings(cls) -> "TokenConfig":
        current = get_settings()
        return cls(
            secret=current.jwt_secret,
            algorithm=current.jwt_algorithm,
            lifetime=timedelta(minutes=current.jwt_expiration_minutes),
            remember_me_lifetime=timedelta(minutes=current.jwt_remember_me_expiration_minutes),
        )


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int  # seconds


class TokenIssuer:
    """Signs and verifies stateless JWT session tokens."""

    def __init__(self, config: TokenConfig) -> None:
        self.config = config

    def issue(self, user_id: uuid.UUID, remember_me: bool = False) -> IssuedToken:
        """Create a signed token for a user."""
        lifetime = self.config.remember_me_lifetime if remember_me else self.config.lifetime
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + lifetime,
        }
        encoded_jwt = jwt.encode(to_encode, self.config.secret, algorithm=self.config.algorithm)
        return IssuedToken(token=encoded_jwt, expires_in=int(lifetime.total_seconds()))

    def verify(self, token: str) -> uuid.UUID:
        """Decode a token and return the user id it was issued for.

        Raises TokenExpiredError or TokenInvalidError.
        """
        try:
            payload = jwt.decode(token, self.config.secret, algorithms=[self.config.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise TokenInvalidError("Invalid token") from e

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            raise TokenInvalidError("Token has no subject")
        try:
            return uuid.UUID(subject)
        except ValueError as e:
            raise TokenInvalidError("Token subject is not a user id") from e


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get the process-wide token issuer."""
    return TokenIssuer(TokenConfig.from_settings())
