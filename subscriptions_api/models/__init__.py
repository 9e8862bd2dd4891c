"""SQLAlchemy models."""

from subscriptions_api.models.password_reset_code import PasswordResetCode
from subscriptions_api.models.publication import Publication
from subscriptions_api.models.recipient import Recipient
from subscriptions_api.models.subscription import Subscription
from subscriptions_api.models.user import User

__all__ = [
    "User",
    "PasswordResetCode",
    "Publication",
    "Recipient",
    "Subscription",
]
