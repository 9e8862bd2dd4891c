"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold."""

    USER = "user"
    ADMIN = "admin"

    def is_admin(self) -> bool:
        """Check if this role grants administrator access."""
        match self:
            case UserRole.ADMIN:
                return True
            case UserRole.USER:
                return False


class PublicationType(str, Enum):
    """Kinds of periodicals available for subscription."""

    NEWSPAPER = "newspaper"
    MAGAZINE = "magazine"

