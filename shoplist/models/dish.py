"""Dish model."""

from sqlalchemy import JSON, Column, String

from shoplist.database import Base, generate_id
from shoplist.models.mixins import TimestampMixin


class Dish(Base, TimestampMixin):
    """A named recipe built from ingredient references."""

    __tablename__ = "dishes"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(120), nullable=False)
    # Ordered refs: [{"ingredient_id": "...", "quantity": 200.0, "unit": "g"}, ...]
    ingredients = Column(JSON, nullable=False, default=list)
