"""Recipient API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from subscriptions_api.api.dependencies import get_current_user
from subscriptions_api.database import get_db
from subscriptions_api.exceptions import BadRequestError, NotFoundError
from subscriptions_api.models.recipient import Recipient
from subscriptions_api.models.subscription import Subscription
from subscriptions_api.models.user import User
from subscriptions_api.schemas.catalog import RecipientCreate, RecipientResponse, RecipientUpdate

router = APIRouter(prefix="/api/v1/recipients", tags=["recipients"])


def get_recipient(db: Session, recipient_id: int) -> Recipient:
    """Get a recipient by ID or raise 404."""
    recipient = db.query(Recipient).filter(Recipient.id == recipient_id).first()
    if recipient is None:
        raise NotFoundError("Recipient not found")
    return recipient


@router.get("", response_model=list[RecipientResponse])
async def get_recipients(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all recipients."""
    return db.query(Recipient).order_by(Recipient.id).all()


@router.post("", response_model=RecipientResponse, status_code=status.HTTP_201_CREATED)
async def create_recipient(
    recipient_data: RecipientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new recipient."""
    recipient = Recipient(**recipient_data.model_dump())
    db.add(recipient)
    db.commit()
    db.refresh(recipient)
    return recipient


@router.get("/{recipient_id}", response_model=RecipientResponse)
async def get_recipient_detail(
    recipient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific recipient."""
    return get_recipient(db, recipient_id)


@router.head("/{recipient_id}")
async def recipient_exists(
    recipient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Check that a recipient exists."""
    get_recipient(db, recipient_id)
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{recipient_id}", response_model=RecipientResponse)
async def update_recipient(
    recipient_id: int,
    recipient_data: RecipientUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a recipient."""
    recipient = get_recipient(db, recipient_id)

    # apartment may be cleared; the other fields are required on the model
    for field, value in recipient_data.model_dump(exclude_unset=True).items():
        if value is not None or field == "apartment":
            setattr(recipient, field, value)

    db.commit()
    db.refresh(recipient)
    return recipient


@router.delete("/{recipient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipient(
    recipient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a recipient without subscriptions."""
    recipient = get_recipient(db, recipient_id)

    subscription_count = (
        db.query(func.count(Subscription.id))
        .filter(Subscription.recipient_id == recipient_id)
        .scalar()
    )
    if subscription_count:
        raise BadRequestError("Cannot delete a recipient that has subscriptions")

    db.delete(recipient)
    db.commit()
