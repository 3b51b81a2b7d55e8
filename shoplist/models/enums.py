"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    USER = "user"
    SUPERUSER = "superuser"

    def can_access_all_lists(self) -> bool:
        """Check if this role bypasses list ownership."""
        return self == Role.SUPERUSER
