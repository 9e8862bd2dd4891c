"""Authentication and password recovery flows."""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from subscriptions_api.exceptions import (
    BadRequestError,
    ConflictError,
    InvalidCredentialsError,
    InvalidOrExpiredCodeError,
    NotFoundError,
    UnauthorizedError,
)
from subscriptions_api.models.user import User
from subscriptions_api.services.reset_codes import claim_reset_code, issue_reset_code
from subscriptions_api.services.security import TokenIssuer, get_password_hash, verify_password
from subscriptions_api.tasks.notifications import deliver_reset_code

logger = logging.getLogger(__name__)

RESET_CODE_SENT_MESSAGE = "If the email is registered, a reset code has been sent"


@dataclass
class LoginResult:
    token: str
    user: User
    expires_in: int


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: uuid.UUID) -> User | None:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Create a new user."""
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(
    db: Session,
    issuer: TokenIssuer,
    email: str,
    password: str,
    remember_me: bool = False,
) -> LoginResult:
    """Authenticate by email and password and issue a session token.

    An unknown email and a wrong password fail identically.
    """
    if not email or not password:
        raise BadRequestError("Email and password are required")

    user = get_user_by_email(db, email)
    if user is None:
        logger.info(f"Login failed for {email}: unknown email")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed for {email}: wrong password")
        raise InvalidCredentialsError()

    user.last_login = datetime.now(UTC)
    db.commit()
    db.refresh(user)

    issued = issuer.issue(user.id, remember_me=remember_me)
    logger.info(f"User {user.id} logged in")
    return LoginResult(token=issued.token, user=user, expires_in=issued.expires_in)


def register(
    db: Session,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Register a new user account."""
    if not email or not password:
        raise BadRequestError("Email and password are required")

    if get_user_by_email(db, email):
        logger.info(f"Registration rejected for {email}: already registered")
        raise ConflictError("A user with this email already exists")

    try:
        user = create_user(db, email, password, first_name, last_name)
    except IntegrityError as e:
        # Lost a race with a concurrent registration; the unique index decides.
        db.rollback()
        raise ConflictError("A user with this email already exists") from e

    logger.info(f"User {user.id} registered")
    return user


def _send_reset_code(db: Session, email: str) -> None:
    reset_code = issue_reset_code(db, email)
    deliver_reset_code.delay(email, reset_code.code)
    logger.info(f"Reset code issued for {email}")


def forgot_password(db: Session, email: str) -> str:
    """Start password recovery.

    Returns the same message whether or not the email is registered.
    """
    if not email:
        raise BadRequestError("Email is required")

    if get_user_by_email(db, email) is None:
        logger.info(f"Password reset requested for unknown email {email}")
        return RESET_CODE_SENT_MESSAGE

    _send_reset_code(db, email)
    return RESET_CODE_SENT_MESSAGE


def resend_code(db: Session, email: str) -> str:
    """Issue a fresh reset code, superseding the previous one.

    Follows the same policy as forgot_password: codes only go to registered
    emails and the response never reveals which case applied.
    """
    if not email:
        raise BadRequestError("Email is required")

    if get_user_by_email(db, email) is None:
        logger.info(f"Code resend requested for unknown email {email}")
        return RESET_CODE_SENT_MESSAGE

    _send_reset_code(db, email)
    return RESET_CODE_SENT_MESSAGE


def reset_password(db: Session, email: str, code: str, new_password: str) -> None:
    """Set a new password using a reset code. The code is consumed."""
    if not email or not code or not new_password:
        raise BadRequestError("Email, code and new password are required")

    if not claim_reset_code(db, email, code):
        db.rollback()
        logger.info(f"Password reset rejected for {email}: invalid or expired code")
        raise InvalidOrExpiredCodeError()

    user = get_user_by_email(db, email)
    if user is None:
        db.rollback()
        raise NotFoundError("User not found")

    user.password_hash = get_password_hash(new_password)
    db.commit()
    logger.info(f"Password reset for user {user.id}")


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Change the password of an authenticated user."""
    if not current_password or not new_password:
        raise BadRequestError("Current and new password are required")

    if not verify_password(current_password, user.password_hash):
        logger.info(f"Password change rejected for user {user.id}: wrong current password")
        raise UnauthorizedError("Current password is incorrect")

    user.password_hash = get_password_hash(new_password)
    db.commit()
    logger.info(f"Password changed for user {user.id}")
