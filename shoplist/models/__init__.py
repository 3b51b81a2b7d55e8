"""SQLAlchemy models."""

from shoplist.models.dish import Dish
from shoplist.models.ingredient import Ingredient
from shoplist.models.shopping_list import ShoppingList
from shoplist.models.user import User

__all__ = [
    "User",
    "Ingredient",
    "Dish",
    "ShoppingList",
]
