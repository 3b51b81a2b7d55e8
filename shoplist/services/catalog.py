"""Ingredient and dish catalog lookups."""

from sqlalchemy.orm import Session

from shoplist.database import id_filter
from shoplist.models.dish import Dish
from shoplist.models.ingredient import Ingredient


class SqlCatalog:
    """Catalog reader backed by the database; every lookup reads current state."""

    def __init__(self, db: Session):
        self.db = db

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        return self.db.query(Ingredient).filter(id_filter(Ingredient.id, ingredient_id)).first()

    def get_dish(self, dish_id: str) -> Dish | None:
        return self.db.query(Dish).filter(id_filter(Dish.id, dish_id)).first()
