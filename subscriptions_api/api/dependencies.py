"""FastAPI dependencies for authentication and access control."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from subscriptions_api.database import get_db
from subscriptions_api.exceptions import ForbiddenError, UnauthorizedError
from subscriptions_api.models.user import User
from subscriptions_api.services.auth import get_user_by_id
from subscriptions_api.services.security import (
    TokenExpiredError,
    TokenInvalidError,
    TokenIssuer,
    get_token_issuer,
)

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token.

    Missing or expired tokens are 401, tokens that fail verification are 403.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token not provided", headers=BEARER_CHALLENGE)

    try:
        user_id = issuer.verify(credentials.credentials)
    except TokenExpiredError:
        raise UnauthorizedError("Token has expired", headers=BEARER_CHALLENGE) from None
    except TokenInvalidError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise ForbiddenError("Invalid token") from None

    user = get_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found", headers=BEARER_CHALLENGE)

    return user


def require_admin(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow only administrators."""
    if not current_user.role.is_admin():
        raise ForbiddenError("Administrator privileges required")
    return current_user


def require_verified(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow only users with a verified email."""
    if not current_user.is_verified:
        raise ForbiddenError("Email verification required")
    return current_user

