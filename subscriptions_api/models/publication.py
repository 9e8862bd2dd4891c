"""Publication model."""

from sqlalchemy import Column, Enum, Numeric, String
from sqlalchemy.orm import relationship

from subscriptions_api.database import Base
from subscriptions_api.models.enums import PublicationType


class Publication(Base):
    """A newspaper or magazine, keyed by its catalog index."""

    __tablename__ = "publications"

    index = Column(String(10), primary_key=True)
    type = Column(
        Enum(
            PublicationType,
            name="publication_type",
            values_callable=lambda types: [t.value for t in types],
        ),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    monthly_cost = Column(Numeric(10, 2), nullable=False)

    # Relationships
    subscriptions = relationship("Subscription", back_populates="publication")
