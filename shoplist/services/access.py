"""Ownership-based access control for shopping lists."""

from dataclasses import dataclass

from shoplist.exceptions import AuthenticationRequiredError, ForbiddenError
from shoplist.models.enums import Role
from shoplist.models.shopping_list import ShoppingList


@dataclass(frozen=True)
class Caller:
    """Identity of the authenticated user making a request."""

    user_id: str
    role: Role = Role.USER

    @property
    def is_superuser(self) -> bool:
        return self.role.can_access_all_lists()


def require_caller(caller: Caller | None) -> Caller:
    """Reject anonymous callers."""
    if caller is None:
        raise AuthenticationRequiredError("Authentication required.")
    return caller


def can_access(list_obj: ShoppingList, caller: Caller) -> bool:
    return caller.is_superuser or list_obj.owner_id == caller.user_id


def ensure_list_access(list_obj: ShoppingList, caller: Caller | None) -> None:
    """Raise unless the caller owns the list or is a superuser."""
    caller = require_caller(caller)
    if not can_access(list_obj, caller):
        raise ForbiddenError("Access to this list is forbidden.")
