"""Dish catalog endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shoplist.api.dependencies import get_cascade_maintainer, get_current_user
from shoplist.database import get_db
from shoplist.models.dish import Dish
from shoplist.models.user import User
from shoplist.schemas.dish import DishCreate, DishResponse, DishUpdate
from shoplist.services.cascade import CascadeMaintainer
from shoplist.services.catalog import SqlCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/dishes", tags=["dishes"])


def get_dish_or_404(db: Session, dish_id: str) -> Dish:
    dish = SqlCatalog(db).get_dish(dish_id)
    if dish is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dish not found")
    return dish


@router.get("", response_model=list[DishResponse])
def list_dishes(db: Annotated[Session, Depends(get_db)]):
    """List all dishes."""
    return db.query(Dish).order_by(Dish.name).all()


@router.get("/{dish_id}", response_model=DishResponse)
def get_dish(dish_id: str, db: Annotated[Session, Depends(get_db)]):
    """Get a specific dish."""
    return get_dish_or_404(db, dish_id)


@router.post("", response_model=DishResponse, status_code=status.HTTP_201_CREATED)
def create_dish(
    dish_data: DishCreate,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new dish with its ingredient references."""
    dish = Dish(
        name=dish_data.name.strip(),
        ingredients=[ref.model_dump() for ref in dish_data.ingredients],
    )
    db.add(dish)
    db.commit()
    db.refresh(dish)
    return dish


@router.put("/{dish_id}", response_model=DishResponse)
def update_dish(
    dish_id: str,
    dish_data: DishUpdate,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a dish. Lists using it pick up the change on their next edit."""
    dish = get_dish_or_404(db, dish_id)

    if dish_data.name is not None:
        dish.name = dish_data.name.strip()
    if dish_data.ingredients is not None:
        dish.ingredients = [ref.model_dump() for ref in dish_data.ingredients]

    db.commit()
    db.refresh(dish)
    return dish


@router.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_dish(
    dish_id: str,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    cascade: Annotated[CascadeMaintainer, Depends(get_cascade_maintainer)],
):
    """Delete a dish and re-materialize the lists that used it."""
    dish = get_dish_or_404(db, dish_id)
    deleted_id = dish.id

    db.delete(dish)
    db.commit()

    report = cascade.on_dish_deleted(deleted_id)
    if not report.ok:
        logger.warning(f"Dish {deleted_id} deleted with partial cascade: {report.failed}")
