"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from subscriptions_api.api.dependencies import get_current_user
from subscriptions_api.database import get_db
from subscriptions_api.models.user import User
from subscriptions_api.schemas.auth import (
    ChangePasswordRequest,
    EmailRequest,
    LoginData,
    ResetPasswordRequest,
    UserData,
    UserLogin,
    UserRegister,
    UserResponse,
)
from subscriptions_api.schemas.common import ApiResponse
from subscriptions_api.services import auth as auth_service
from subscriptions_api.services.security import TokenIssuer, get_token_issuer

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=ApiResponse[LoginData])
async def login(
    credentials: UserLogin,
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    result = auth_service.login(
        db, issuer, credentials.email, credentials.password, credentials.remember_me
    )
    return ApiResponse(
        message="Logged in successfully",
        data=LoginData(
            token=result.token,
            user=UserResponse.model_validate(result.user),
            expires_in=result.expires_in,
        ),
    )


@router.post(
    "/register", response_model=ApiResponse[UserData], status_code=status.HTTP_201_CREATED
)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user = auth_service.register(
        db, user_data.email, user_data.password, user_data.first_name, user_data.last_name
    )
    return ApiResponse(
        message="Registered successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.post("/forgot-password", response_model=ApiResponse[None])
async def forgot_password(
    request: EmailRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Request a password reset code."""
    message = auth_service.forgot_password(db, request.email)
    return ApiResponse(message=message)


@router.post("/reset-password", response_model=ApiResponse[None])
async def reset_password(
    request: ResetPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Set a new password with a reset code."""
    auth_service.reset_password(db, request.email, request.code, request.new_password)
    return ApiResponse(message="Password has been reset")


@router.post("/resend-code", response_model=ApiResponse[None])
async def resend_code(
    request: EmailRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Send a new reset code, invalidating the previous one."""
    message = auth_service.resend_code(db, request.email)
    return ApiResponse(message=message)


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    request: ChangePasswordRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Change the current user's password."""
    auth_service.change_password(db, current_user, request.current_password, request.new_password)
    return ApiResponse(message="Password changed successfully")


@router.get("/profile", response_model=ApiResponse[UserData])
async def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return ApiResponse(data=UserData(user=UserResponse.model_validate(current_user)))
