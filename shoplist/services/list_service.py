"""Shopping list service: owner-checked CRUD around the materialization engine."""

import logging

from sqlalchemy.orm import Session

from shoplist.database import id_filter, ids_match
from shoplist.models.shopping_list import ShoppingList
from shoplist.schemas.shopping_list import (
    ListItem,
    ListItemEntry,
    ShoppingListCreate,
    ShoppingListUpdate,
)
from shoplist.services.access import Caller, ensure_list_access, require_caller
from shoplist.services.catalog import SqlCatalog
from shoplist.services.materialization import CatalogReader, materialize

logger = logging.getLogger(__name__)


def load_items(list_obj: ShoppingList) -> list[ListItem]:
    """Parse the stored items of a list."""
    return [ListItem.model_validate(item) for item in list_obj.items or []]


def dump_items(items: list[ListItem]) -> list[dict]:
    return [item.model_dump() for item in items]


class ShoppingListService:
    """Service for shopping list operations."""

    def __init__(self, db: Session, catalog: CatalogReader | None = None):
        self.db = db
        self.catalog = catalog or SqlCatalog(db)

    def get_all(self, caller: Caller | None) -> list[ShoppingList]:
        """Get the lists visible to the caller; superusers see every list."""
        caller = require_caller(caller)
        query = self.db.query(ShoppingList)
        if not caller.is_superuser:
            query = query.filter(ShoppingList.owner_id == caller.user_id)
        return query.order_by(ShoppingList.date.desc()).all()

    def get_by_id(self, list_id: str, caller: Caller | None) -> ShoppingList | None:
        require_caller(caller)
        list_obj = self._find(list_id)
        if list_obj is None:
            return None
        ensure_list_access(list_obj, caller)
        return list_obj

    def create(self, data: ShoppingListCreate, caller: Caller | None) -> ShoppingList:
        """Create a list owned by the caller, materializing its items."""
        caller = require_caller(caller)

        list_obj = ShoppingList(
            name=data.name,
            owner_id=caller.user_id,
            dish_ids=list(data.dish_ids or []),
            items=[],
        )
        if data.date is not None:
            list_obj.date = data.date

        self.rematerialize(list_obj, manual_items=data.items, keep_checked=False)

        self.db.add(list_obj)
        self.db.commit()
        self.db.refresh(list_obj)

        logger.info(f"Created list {list_obj.id} with {len(list_obj.items)} items")
        return list_obj

    def update(
        self, list_id: str, data: ShoppingListUpdate, caller: Caller | None
    ) -> ShoppingList | None:
        """Apply an edit and re-materialize; omitted items mean no manual entries."""
        require_caller(caller)
        list_obj = self._find(list_id)
        if list_obj is None:
            return None
        ensure_list_access(list_obj, caller)

        if data.name is not None:
            list_obj.name = data.name
        if data.date is not None:
            list_obj.date = data.date
        if data.dish_ids is not None:
            list_obj.dish_ids = list(data.dish_ids)

        self.rematerialize(list_obj, manual_items=data.items)

        self.db.commit()
        self.db.refresh(list_obj)

        logger.info(f"Updated list {list_obj.id} ({len(list_obj.items)} items)")
        return list_obj

    def delete(self, list_id: str, caller: Caller | None) -> bool:
        require_caller(caller)
        list_obj = self._find(list_id)
        if list_obj is None:
            return False
        ensure_list_access(list_obj, caller)

        self.db.delete(list_obj)
        self.db.commit()

        logger.info(f"Deleted list {list_id}")
        return True

    def set_item_checked(
        self,
        list_id: str,
        ingredient_id: str,
        checked: bool,
        caller: Caller | None,
    ) -> ShoppingList | None:
        """Flip one item's checked flag in place, without re-materializing.

        Returns None when the list or the item does not exist.
        """
        require_caller(caller)
        list_obj = self._find(list_id)
        if list_obj is None:
            return None
        ensure_list_access(list_obj, caller)

        items = load_items(list_obj)
        target = next((i for i in items if ids_match(i.ingredient_id, ingredient_id)), None)
        if target is None:
            return None

        target.checked = checked
        list_obj.items = dump_items(items)
        self.db.commit()
        self.db.refresh(list_obj)
        return list_obj

    def rematerialize(
        self,
        list_obj: ShoppingList,
        manual_items: list[ListItemEntry] | None = None,
        keep_checked: bool = True,
    ) -> None:
        """Recompute ``list_obj.items`` from its dishes and the given manual entries.

        Does not commit.
        """
        prior_items = load_items(list_obj) if keep_checked else None
        items = materialize(self.catalog, list_obj.dish_ids, manual_items, prior_items)
        list_obj.items = dump_items(items)

    def _find(self, list_id: str) -> ShoppingList | None:
        return self.db.query(ShoppingList).filter(id_filter(ShoppingList.id, list_id)).first()
