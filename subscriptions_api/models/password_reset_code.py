"""Password reset code model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, String, Uuid

from subscriptions_api.database import Base
from subscriptions_api.models.mixins import TimestampMixin


class PasswordResetCode(Base, TimestampMixin):
    """One-time numeric code proving control of an email address.

    Codes reference users by email only, without a foreign key. Superseded
    and redeemed codes are flagged as used and kept.
    """

    __tablename__ = "password_reset_codes"
    __table_args__ = (Index("ix_password_reset_codes_email_code", "email", "code"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    is_used = Column(Boolean, nullable=False, default=False)
