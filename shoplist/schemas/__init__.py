"""Pydantic schemas for API requests and responses."""

from shoplist.schemas.auth import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from shoplist.schemas.dish import (
    DishCreate,
    DishIngredientRef,
    DishIngredientRefResponse,
    DishResponse,
    DishUpdate,
)
from shoplist.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from shoplist.schemas.shopping_list import (
    ListItem,
    ListItemEntry,
    ShoppingListCreate,
    ShoppingListResponse,
    ShoppingListUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "UserCreate",
    "UserUpdate",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "DishIngredientRef",
    "DishIngredientRefResponse",
    "DishCreate",
    "DishUpdate",
    "DishResponse",
    "ListItemEntry",
    "ListItem",
    "ShoppingListCreate",
    "ShoppingListUpdate",
    "ShoppingListResponse",
]
