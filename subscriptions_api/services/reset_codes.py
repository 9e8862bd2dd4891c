"""Storage and redemption of password reset codes."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy import update
from sqlalchemy.orm import Session

from subscriptions_api.config import get_settings
from subscriptions_api.models.password_reset_code import PasswordResetCode

logger = logging.getLogger(__name__)


def generate_code() -> str:
    """Generate a 6-digit numeric code."""
    return str(100000 + secrets.randbelow(900000))


def invalidate_codes(db: Session, email: str) -> int:
    """Mark every unused code for an email as used. Does not commit."""
    result = db.execute(
        update(PasswordResetCode)
        .where(
            PasswordResetCode.email == email,
            PasswordResetCode.is_used == False,  # noqa: E712
        )
        .values(is_used=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def issue_reset_code(db: Session, email: str) -> PasswordResetCode:
    """Supersede any outstanding codes for an email and store a fresh one."""
    superseded = invalidate_codes(db, email)
    if superseded:
        logger.info(f"Superseded {superseded} reset code(s) for {email}")

    ttl = timedelta(minutes=get_settings().reset_code_ttl_minutes)
    reset_code = PasswordResetCode(
        email=email,
        code=generate_code(),
        expires_at=datetime.now(UTC) + ttl,
        is_used=False,
    )
    db.add(reset_code)
    db.commit()
    db.refresh(reset_code)
    return reset_code


def claim_reset_code(db: Session, email: str, code: str) -> bool:
    """Atomically mark a matching unused, unexpired code as used.

    The used=false predicate is part of the UPDATE, so of two concurrent
    claims on the same code only one can affect a row. Does not commit.
    """
    result = db.execute(
        update(PasswordResetCode)
        .where(
            PasswordResetCode.email == email,
            PasswordResetCode.code == code,
            PasswordResetCode.is_used == False,  # noqa: E712
            PasswordResetCode.expires_at > datetime.now(UTC),
        )
        .values(is_used=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0
