"""User model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, String, Uuid

from subscriptions_api.database import Base
from subscriptions_api.models.enums import UserRole
from subscriptions_api.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User account used for authentication and role checks."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.USER,
    )
