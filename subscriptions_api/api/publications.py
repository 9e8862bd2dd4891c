"""Publication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from subscriptions_api.api.dependencies import get_current_user
from subscriptions_api.database import get_db
from subscriptions_api.exceptions import BadRequestError, ConflictError, NotFoundError
from subscriptions_api.models.publication import Publication
from subscriptions_api.models.subscription import Subscription
from subscriptions_api.models.user import User
from subscriptions_api.schemas.catalog import (
    PublicationCreate,
    PublicationResponse,
    PublicationUpdate,
)

router = APIRouter(prefix="/api/v1/publications", tags=["publications"])


def get_publication(db: Session, index: str) -> Publication:
    """Get a publication by catalog index or raise 404."""
    publication = db.query(Publication).filter(Publication.index == index).first()
    if publication is None:
        raise NotFoundError("Publication not found")
    return publication


@router.get("", response_model=list[PublicationResponse])
async def get_publications(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all publications."""
    return db.query(Publication).order_by(Publication.index).all()


@router.post("", response_model=PublicationResponse, status_code=status.HTTP_201_CREATED)
async def create_publication(
    publication_data: PublicationCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new publication."""
    if db.query(Publication).filter(Publication.index == publication_data.index).first():
        raise ConflictError("A publication with this index already exists")

    publication = Publication(**publication_data.model_dump())
    db.add(publication)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("A publication with this index already exists") from e
    db.refresh(publication)
    return publication


@router.get("/{index}", response_model=PublicationResponse)
async def get_publication_detail(
    index: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific publication."""
    return get_publication(db, index)


@router.head("/{index}")
async def publication_exists(
    index: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Check that a publication exists."""
    get_publication(db, index)
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{index}", response_model=PublicationResponse)
async def update_publication(
    index: str,
    publication_data: PublicationUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a publication."""
    publication = get_publication(db, index)

    for field, value in publication_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(publication, field, value)

    db.commit()
    db.refresh(publication)
    return publication


@router.delete("/{index}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_publication(
    index: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a publication that nobody is subscribed to."""
    publication = get_publication(db, index)

    subscription_count = (
        db.query(func.count(Subscription.id))
        .filter(Subscription.publication_index == index)
        .scalar()
    )
    if subscription_count:
        raise BadRequestError("Cannot delete a publication that has subscriptions")

    db.delete(publication)
    db.commit()
