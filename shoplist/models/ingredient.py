"""Ingredient model."""

from sqlalchemy import Column, String

from shoplist.database import Base, generate_id
from shoplist.models.mixins import TimestampMixin


class Ingredient(Base, TimestampMixin):
    """Catalog entry referenced by dishes and shopping list items."""

    __tablename__ = "ingredients"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    aisle = Column(String(100), nullable=True)
