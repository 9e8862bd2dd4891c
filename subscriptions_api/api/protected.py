"""Routes gated on authentication, verification and role."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from subscriptions_api.api.dependencies import get_current_user, require_admin, require_verified
from subscriptions_api.database import get_db
from subscriptions_api.models.enums import UserRole
from subscriptions_api.models.user import User
from subscriptions_api.schemas.auth import ProfileUpdate, UserResponse
from subscriptions_api.schemas.common import ApiResponse

router = APIRouter(prefix="/api/v1/protected", tags=["protected"])


@router.get("/profile", response_model=ApiResponse[dict])
async def protected_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Any authenticated user."""
    return ApiResponse(
        message="Access granted",
        data={
            "user": UserResponse.model_validate(current_user).model_dump(mode="json", by_alias=True),
            "accessedAt": datetime.now(UTC).isoformat(),
        },
    )


@router.get("/verified-data", response_model=ApiResponse[dict])
async def verified_data(
    current_user: Annotated[User, Depends(require_verified)],
):
    """Only users with a verified email."""
    return ApiResponse(
        message="Access granted to verified users",
        data={
            "user": current_user.email,
            "accessedAt": datetime.now(UTC).isoformat(),
        },
    )


@router.get("/admin-stats", response_model=ApiResponse[dict])
async def admin_stats(
    current_user: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """User counts for administrators."""
    total_users = db.query(func.count(User.id)).scalar() or 0
    admins = db.query(func.count(User.id)).filter(User.role == UserRole.ADMIN).scalar() or 0
    verified = (
        db.query(func.count(User.id)).filter(User.is_verified == True).scalar() or 0  # noqa: E712
    )
    return ApiResponse(
        message="Administrative statistics",
        data={
            "totalUsers": total_users,
            "adminUsers": admins,
            "verifiedUsers": verified,
            "admin": current_user.email,
            "accessedAt": datetime.now(UTC).isoformat(),
        },
    )


@router.post("/update-profile", response_model=ApiResponse[dict])
async def update_profile(
    profile: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the current user's name."""
    updated_fields = profile.model_dump(exclude_unset=True)
    for field, value in updated_fields.items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)

    return ApiResponse(
        message="Profile updated",
        data={
            "updatedFields": ProfileUpdate(**updated_fields).model_dump(
                by_alias=True, exclude_unset=True
            ),
            "user": UserResponse.model_validate(current_user).model_dump(mode="json", by_alias=True),
        },
    )


@router.get("/users", response_model=ApiResponse[dict])
async def list_users(
    current_user: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """All users, newest first."""
    users = db.query(User).order_by(User.created_at.desc()).all()
    return ApiResponse(
        data={
            "users": [
                UserResponse.model_validate(user).model_dump(mode="json", by_alias=True)
                for user in users
            ],
            "total": len(users),
            "requestedBy": current_user.email,
        },
    )
