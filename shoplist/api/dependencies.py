"""FastAPI dependencies for authentication, services and database."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from shoplist.database import get_db
from shoplist.exceptions import ForbiddenError
from shoplist.models.user import User
from shoplist.services.access import Caller
from shoplist.services.auth import decode_access_token, get_user_by_id
from shoplist.services.cascade import CascadeMaintainer
from shoplist.services.list_service import ShoppingListService

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User | None:
    """Resolve the bearer token to a user; no token means an anonymous request."""
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid authentication credentials")

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid authentication credentials")

    user = get_user_by_id(db, str(user_id))
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if user is None:
        raise _unauthorized("Not authenticated")
    return user


def get_current_caller(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> Caller | None:
    """Caller identity for the list services; None when anonymous."""
    if user is None:
        return None
    return Caller(user_id=user.id, role=user.role)


def get_superuser(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Require the superuser role."""
    if not user.is_superuser:
        raise ForbiddenError("Superuser role required.", code="SUPERUSER_REQUIRED")
    return user


def get_list_service(
    db: Annotated[Session, Depends(get_db)],
) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(db)


def get_cascade_maintainer(
    db: Annotated[Session, Depends(get_db)],
) -> CascadeMaintainer:
    """Get cascade maintainer with dependencies."""
    return CascadeMaintainer(db)
