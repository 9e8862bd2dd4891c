"""Authentication schemas."""

import uuid
from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field, ValidatorFunctionWrapHandler, field_validator

from subscriptions_api.models.enums import UserRole
from subscriptions_api.schemas.common import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)

    @field_validator("email", mode="wrap")
    @classmethod
    def keep_email_as_submitted(cls, value, handler: ValidatorFunctionWrapHandler):
        # EmailStr normalizes the domain; lookups compare the stored string exactly.
        handler(value)
        return value


class UserLogin(CamelModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    remember_me: bool = False


class EmailRequest(CamelModel):
    """Forgot-password and resend-code request."""

    email: str = Field(..., max_length=255)


class ResetPasswordRequest(CamelModel):
    """Reset a password with an emailed code."""

    email: str = Field(..., max_length=255)
    code: str = Field(..., max_length=6)
    new_password: str = Field(..., max_length=128)


class ChangePasswordRequest(CamelModel):
    """Change the password of the signed-in user."""

    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=128)


class UserResponse(CamelModel):
    """User information response. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    first_name: str | None
    last_name: str | None
    is_verified: bool
    last_login: datetime | None
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserData(CamelModel):
    user: UserResponse


class LoginData(CamelModel):
    """Token, user and token lifetime in seconds."""

    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
    expires_in: int


class ProfileUpdate(CamelModel):
    """Editable profile fields."""

    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
