"""Shopping list model."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from shoplist.database import Base, generate_id
from shoplist.models.mixins import TimestampMixin, utcnow


class ShoppingList(Base, TimestampMixin):
    """Dated shopping list owned by a single user."""

    __tablename__ = "shopping_lists"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(120), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    # Materialized items, one per ingredient, sorted by ingredient name
    items = Column(JSON, nullable=False, default=list)
    dish_ids = Column(JSON, nullable=False, default=list)

    # Relationships
    owner = relationship("User", backref="shopping_lists")

    @property
    def unchecked_count(self) -> int:
        return sum(1 for item in self.items or [] if not item.get("checked"))
