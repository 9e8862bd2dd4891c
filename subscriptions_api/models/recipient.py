"""Recipient model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from subscriptions_api.database import Base


class Recipient(Base):
    """A person receiving subscribed publications at a postal address."""

    __tablename__ = "recipients"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    street = Column(String(255), nullable=False)
    house = Column(String(10), nullable=False)
    apartment = Column(String(10), nullable=True)

    # Relationships
    subscriptions = relationship("Subscription", back_populates="recipient")
