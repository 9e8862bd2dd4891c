"""Subscription model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from subscriptions_api.database import Base


class Subscription(Base):
    """A recipient's subscription to a publication for a number of months."""

    __tablename__ = "subscriptions"
    __table_args__ = (Index("ix_subscriptions_start", "start_year", "start_month"),)

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("recipients.id"), nullable=False, index=True)
    publication_index = Column(
        String(10), ForeignKey("publications.index"), nullable=False, index=True
    )
    duration_months = Column(Integer, nullable=False)  # 1, 3 or 6
    start_month = Column(Integer, nullable=False)
    start_year = Column(Integer, nullable=False)

    # Relationships
    recipient = relationship("Recipient", back_populates="subscriptions")
    publication = relationship("Publication", back_populates="subscriptions")
