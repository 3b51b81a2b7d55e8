"""Ingredient catalog endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shoplist.api.dependencies import get_cascade_maintainer, get_current_user
from shoplist.database import get_db
from shoplist.models.ingredient import Ingredient
from shoplist.models.user import User
from shoplist.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from shoplist.services.cascade import CascadeMaintainer
from shoplist.services.catalog import SqlCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


def get_ingredient_or_404(db: Session, ingredient_id: str) -> Ingredient:
    ingredient = SqlCatalog(db).get_ingredient(ingredient_id)
    if ingredient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


@router.get("", response_model=list[IngredientResponse])
def list_ingredients(db: Annotated[Session, Depends(get_db)]):
    """List all ingredients."""
    return db.query(Ingredient).order_by(Ingredient.name).all()


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(ingredient_id: str, db: Annotated[Session, Depends(get_db)]):
    """Get a specific ingredient."""
    return get_ingredient_or_404(db, ingredient_id)


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    ingredient_data: IngredientCreate,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new ingredient."""
    ingredient = Ingredient(name=ingredient_data.name.strip(), aisle=ingredient_data.aisle)
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: str,
    ingredient_data: IngredientUpdate,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an ingredient. Lists keep their snapshot until next materialized."""
    ingredient = get_ingredient_or_404(db, ingredient_id)

    if ingredient_data.name is not None:
        ingredient.name = ingredient_data.name.strip()
    if ingredient_data.aisle is not None:
        ingredient.aisle = ingredient_data.aisle

    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: str,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    cascade: Annotated[CascadeMaintainer, Depends(get_cascade_maintainer)],
):
    """Delete an ingredient and purge it from dishes and lists."""
    ingredient = get_ingredient_or_404(db, ingredient_id)
    deleted_id = ingredient.id

    db.delete(ingredient)
    db.commit()

    report = cascade.on_ingredient_deleted(deleted_id)
    if not report.ok:
        logger.warning(f"Ingredient {deleted_id} deleted with partial cascade: {report.failed}")
