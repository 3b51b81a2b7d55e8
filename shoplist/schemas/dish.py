"""Dish schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shoplist.database import normalize_id
from shoplist.schemas.units import DISH_UNITS, check_unit


class DishIngredientRefResponse(BaseModel):
    """Stored reference from a dish to a catalog ingredient."""

    ingredient_id: str
    quantity: float | None = None
    unit: str | None = None


class DishIngredientRef(BaseModel):
    """Reference from a dish to a catalog ingredient, as submitted."""

    ingredient_id: str = Field(..., min_length=1)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)

    @field_validator("ingredient_id")
    @classmethod
    def normalize_ingredient_id(cls, value: str) -> str:
        return normalize_id(value)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, value: str | None) -> str | None:
        return check_unit(value, DISH_UNITS)


class DishCreate(BaseModel):
    """Create a new dish."""

    name: str = Field(..., min_length=1, max_length=120)
    ingredients: list[DishIngredientRef] = Field(..., min_length=1)


class DishUpdate(BaseModel):
    """Update a dish."""

    name: str | None = Field(None, min_length=1, max_length=120)
    ingredients: list[DishIngredientRef] | None = None


class DishResponse(BaseModel):
    """Dish response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    ingredients: list[DishIngredientRefResponse]
