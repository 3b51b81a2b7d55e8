"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shoplist.database import normalize_id
from shoplist.schemas.units import LIST_UNITS, check_unit


class ListItemEntry(BaseModel):
    """A manually specified list entry.

    ``checked`` is only applied when given explicitly; ``None`` keeps whatever
    state the list already had for the ingredient.
    """

    ingredient_id: str = Field(..., min_length=1)
    ingredient_name: str = Field(..., min_length=1, max_length=100)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    aisle: str | None = Field(None, max_length=100)
    checked: bool | None = None

    @field_validator("ingredient_id")
    @classmethod
    def normalize_ingredient_id(cls, value: str) -> str:
        return normalize_id(value)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, value: str | None) -> str | None:
        return check_unit(value, LIST_UNITS)


def normalize_ids(ids: list[str] | None) -> list[str] | None:
    if ids is None:
        return None
    return [normalize_id(raw_id) for raw_id in ids]


class ListItem(BaseModel):
    """A materialized list item."""

    ingredient_id: str
    ingredient_name: str
    quantity: float | None = None
    unit: str | None = None
    aisle: str | None = None
    checked: bool = False


class ShoppingListCreate(BaseModel):
    """Create a new shopping list."""

    name: str = Field(..., min_length=1, max_length=120)
    date: datetime | None = None
    items: list[ListItemEntry] | None = None
    dish_ids: list[str] | None = None

    @field_validator("dish_ids")
    @classmethod
    def normalize_dish_ids(cls, value: list[str] | None) -> list[str] | None:
        return normalize_ids(value)


class ShoppingListUpdate(BaseModel):
    """Update a shopping list."""

    name: str | None = Field(None, min_length=1, max_length=120)
    date: datetime | None = None
    items: list[ListItemEntry] | None = None
    dish_ids: list[str] | None = None

    @field_validator("dish_ids")
    @classmethod
    def normalize_dish_ids(cls, value: list[str] | None) -> list[str] | None:
        return normalize_ids(value)


class ShoppingListResponse(BaseModel):
    """Shopping list response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    date: datetime
    items: list[ListItem]
    dish_ids: list[str]
    owner_id: str
    created_at: datetime
    updated_at: datetime
    unchecked_count: int = 0
