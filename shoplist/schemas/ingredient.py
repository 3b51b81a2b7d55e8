"""Ingredient schemas."""

from pydantic import BaseModel, ConfigDict, Field


class IngredientCreate(BaseModel):
    """Create a new ingredient."""

    name: str = Field(..., min_length=1, max_length=100)
    aisle: str | None = Field(None, max_length=100)


class IngredientUpdate(BaseModel):
    """Update an ingredient."""

    name: str | None = Field(None, min_length=1, max_length=100)
    aisle: str | None = Field(None, max_length=100)


class IngredientResponse(BaseModel):
    """Ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    aisle: str | None
