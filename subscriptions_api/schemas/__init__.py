"""Pydantic schemas for API request/response validation."""

from subscriptions_api.schemas.auth import (
    ChangePasswordRequest,
    EmailRequest,
    LoginData,
    ProfileUpdate,
    ResetPasswordRequest,
    UserData,
    UserLogin,
    UserRegister,
    UserResponse,
)
from subscriptions_api.schemas.catalog import (
    PublicationCreate,
    PublicationResponse,
    PublicationUpdate,
    RecipientCreate,
    RecipientResponse,
    RecipientUpdate,
    SubscriptionCreate,
    SubscriptionResponse,
    SubscriptionUpdate,
)
from subscriptions_api.schemas.common import ApiResponse

__all__ = [
    "ApiResponse",
    "UserRegister",
    "UserLogin",
    "EmailRequest",
    "ResetPasswordRequest",
    "ChangePasswordRequest",
    "UserResponse",
    "UserData",
    "LoginData",
    "ProfileUpdate",
    "PublicationCreate",
    "PublicationUpdate",
    "PublicationResponse",
    "RecipientCreate",
    "RecipientUpdate",
    "RecipientResponse",
    "SubscriptionCreate",
    "SubscriptionUpdate",
    "SubscriptionResponse",
]
