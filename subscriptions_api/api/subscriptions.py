"""Subscription API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session, joinedload

from subscriptions_api.api.dependencies import get_current_user
from subscriptions_api.database import get_db
from subscriptions_api.exceptions import BadRequestError, NotFoundError
from subscriptions_api.models.publication import Publication
from subscriptions_api.models.recipient import Recipient
from subscriptions_api.models.subscription import Subscription
from subscriptions_api.models.user import User
from subscriptions_api.schemas.catalog import (
    SubscriptionCreate,
    SubscriptionResponse,
    SubscriptionUpdate,
)

router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


def get_subscription(db: Session, subscription_id: int) -> Subscription:
    """Get a subscription with its recipient and publication or raise 404."""
    subscription = (
        db.query(Subscription)
        .options(joinedload(Subscription.recipient), joinedload(Subscription.publication))
        .filter(Subscription.id == subscription_id)
        .first()
    )
    if subscription is None:
        raise NotFoundError("Subscription not found")
    return subscription


def check_references(db: Session, recipient_id: int | None, publication_index: str | None) -> None:
    """Reject references to recipients or publications that do not exist."""
    if recipient_id is not None:
        if db.query(Recipient).filter(Recipient.id == recipient_id).first() is None:
            raise BadRequestError("Recipient does not exist")
    if publication_index is not None:
        if db.query(Publication).filter(Publication.index == publication_index).first() is None:
            raise BadRequestError("Publication does not exist")


@router.get("", response_model=list[SubscriptionResponse])
async def get_subscriptions(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all subscriptions."""
    return (
        db.query(Subscription)
        .options(joinedload(Subscription.recipient), joinedload(Subscription.publication))
        .order_by(Subscription.id)
        .all()
    )


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_subscription(
    subscription_data: SubscriptionCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new subscription."""
    check_references(db, subscription_data.recipient_id, subscription_data.publication_index)

    subscription = Subscription(**subscription_data.model_dump())
    db.add(subscription)
    db.commit()
    return get_subscription(db, subscription.id)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
async def get_subscription_detail(
    subscription_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific subscription."""
    return get_subscription(db, subscription_id)


@router.head("/{subscription_id}")
async def subscription_exists(
    subscription_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Check that a subscription exists."""
    get_subscription(db, subscription_id)
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
async def update_subscription(
    subscription_id: int,
    subscription_data: SubscriptionUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a subscription."""
    subscription = get_subscription(db, subscription_id)

    updates = {
        field: value
        for field, value in subscription_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    check_references(db, updates.get("recipient_id"), updates.get("publication_index"))

    for field, value in updates.items():
        setattr(subscription, field, value)

    db.commit()
    return get_subscription(db, subscription_id)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription(
    subscription_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a subscription."""
    subscription = get_subscription(db, subscription_id)
    db.delete(subscription)
    db.commit()
