"""Publication, recipient and subscription schemas."""

from decimal import Decimal
from typing import Literal

from pydantic import ConfigDict, Field

from subscriptions_api.models.enums import PublicationType
from subscriptions_api.schemas.common import CamelModel

APARTMENT_PATTERN = r"^\d+[a-zA-Zа-яА-ЯёЁ]?$"

Duration = Literal[1, 3, 6]


class PublicationCreate(CamelModel):
    """Create a publication."""

    index: str = Field(..., min_length=1, max_length=10)
    type: PublicationType
    title: str = Field(..., min_length=1, max_length=255)
    monthly_cost: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class PublicationUpdate(CamelModel):
    """Update a publication. The index is immutable."""

    type: PublicationType | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    monthly_cost: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class PublicationResponse(CamelModel):
    """Publication response."""

    model_config = ConfigDict(from_attributes=True)

    index: str
    type: PublicationType
    title: str
    monthly_cost: Decimal


class RecipientCreate(CamelModel):
    """Create a recipient."""

    full_name: str = Field(..., min_length=2, max_length=255)
    street: str = Field(..., min_length=1, max_length=255)
    house: str = Field(..., min_length=1, max_length=10)
    apartment: str | None = Field(None, max_length=10, pattern=APARTMENT_PATTERN)


class RecipientUpdate(CamelModel):
    """Update a recipient."""

    full_name: str | None = Field(None, min_length=2, max_length=255)
    street: str | None = Field(None, min_length=1, max_length=255)
    house: str | None = Field(None, min_length=1, max_length=10)
    apartment: str | None = Field(None, max_length=10, pattern=APARTMENT_PATTERN)


class RecipientResponse(CamelModel):
    """Recipient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    street: str
    house: str
    apartment: str | None


class SubscriptionCreate(CamelModel):
    """Create a subscription."""

    recipient_id: int
    publication_index: str = Field(..., min_length=1, max_length=10)
    duration_months: Duration
    start_month: int = Field(..., ge=1, le=12)
    start_year: int = Field(..., ge=2000, le=2100)


class SubscriptionUpdate(CamelModel):
    """Update a subscription."""

    recipient_id: int | None = None
    publication_index: str | None = Field(None, min_length=1, max_length=10)
    duration_months: Duration | None = None
    start_month: int | None = Field(None, ge=1, le=12)
    start_year: int | None = Field(None, ge=2000, le=2100)


class SubscriptionResponse(CamelModel):
    """Subscription response with its recipient and publication."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    publication_index: str
    duration_months: int
    start_month: int
    start_year: int
    recipient: RecipientResponse | None = None
    publication: PublicationResponse | None = None
