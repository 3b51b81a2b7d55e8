"""User administration endpoints (superuser only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shoplist.api.dependencies import get_superuser
from shoplist.database import get_db
from shoplist.exceptions import ConflictError
from shoplist.models.shopping_list import ShoppingList
from shoplist.models.user import User
from shoplist.schemas.auth import UserCreate, UserResponse, UserUpdate
from shoplist.services.auth import (
    create_user,
    get_password_hash,
    get_user_by_email,
    get_user_by_id,
)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def get_user_or_404(db: Session, user_id: str) -> User:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("", response_model=list[UserResponse])
def list_users(
    _: Annotated[User, Depends(get_superuser)],
    db: Annotated[Session, Depends(get_db)],
):
    """List all users."""
    return db.query(User).order_by(User.email).all()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    _: Annotated[User, Depends(get_superuser)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific user."""
    return get_user_or_404(db, user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user_account(
    user_data: UserCreate,
    _: Annotated[User, Depends(get_superuser)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a user with any role."""
    if get_user_by_email(db, user_data.email):
        raise ConflictError("Email already registered", code="EMAIL_TAKEN")
    return create_user(db, user_data.email, user_data.password, user_data.pseudo, user_data.role)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    _: Annotated[User, Depends(get_superuser)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a user."""
    user = get_user_or_404(db, user_id)

    if user_data.email is not None:
        existing = get_user_by_email(db, user_data.email)
        if existing and existing.id != user.id:
            raise ConflictError("Email already registered", code="EMAIL_TAKEN")
        user.email = user_data.email.strip().lower()
    if user_data.pseudo is not None:
        user.pseudo = user_data.pseudo.strip()
    if user_data.password is not None:
        user.password_hash = get_password_hash(user_data.password)
    if user_data.role is not None:
        user.role = user_data.role

    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    _: Annotated[User, Depends(get_superuser)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a user together with the lists they own."""
    user = get_user_or_404(db, user_id)
    db.query(ShoppingList).filter(ShoppingList.owner_id == user.id).delete()
    db.delete(user)
    db.commit()
