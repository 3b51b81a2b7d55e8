"""Cascades that keep dishes and lists consistent with catalog deletions.

Dishes and lists store raw ids, so deleting an ingredient or a dish leaves
dangling references until these hooks run. Each affected document is committed
on its own: one failing document is logged and skipped, and never undoes the
deletion that triggered the cascade.

Deleting an ingredient drops the matching line from lists directly, without
re-summing the remaining quantities. Deleting a dish re-materializes every list
that referenced it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from shoplist.database import ids_match
from shoplist.models.dish import Dish
from shoplist.models.shopping_list import ShoppingList
from shoplist.services.list_service import ShoppingListService

logger = logging.getLogger(__name__)


@dataclass
class CascadeReport:
    """Ids of the documents a cascade rewrote, and of those it failed on."""

    updated: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class CascadeMaintainer:
    """Propagates ingredient and dish deletions to dependent documents."""

    def __init__(self, db: Session, list_service: ShoppingListService | None = None):
        self.db = db
        self.list_service = list_service or ShoppingListService(db)

    def on_ingredient_deleted(self, ingredient_id: str) -> CascadeReport:
        """Remove an ingredient from every dish, then from every list."""
        report = CascadeReport()

        def uses_ingredient(dish: Dish) -> bool:
            return any(ids_match(ref["ingredient_id"], ingredient_id) for ref in dish.ingredients)

        def purge_from_dish(dish: Dish) -> None:
            dish.ingredients = [
                ref
                for ref in dish.ingredients
                if not ids_match(ref["ingredient_id"], ingredient_id)
            ]

        dishes = [dish for dish in self.db.query(Dish).all() if uses_ingredient(dish)]
        self._apply(dishes, purge_from_dish, report)

        def purge_from_list(list_obj: ShoppingList) -> None:
            list_obj.items = [
                item
                for item in list_obj.items
                if not ids_match(item["ingredient_id"], ingredient_id)
            ]

        lists = [
            lst
            for lst in self.db.query(ShoppingList).all()
            if any(ids_match(item["ingredient_id"], ingredient_id) for item in lst.items or [])
        ]
        self._apply(lists, purge_from_list, report)

        logger.info(
            f"Ingredient {ingredient_id} cascade: {len(dishes)} dishes, {len(lists)} lists, "
            f"{len(report.failed)} failures"
        )
        return report

    def on_dish_deleted(self, dish_id: str) -> CascadeReport:
        """Drop a dish from every list that references it and re-materialize them."""
        report = CascadeReport()

        def detach_dish(list_obj: ShoppingList) -> None:
            list_obj.dish_ids = [d for d in list_obj.dish_ids if not ids_match(d, dish_id)]
            self.list_service.rematerialize(list_obj)

        lists = [
            lst
            for lst in self.db.query(ShoppingList).all()
            if any(ids_match(d, dish_id) for d in lst.dish_ids or [])
        ]
        self._apply(lists, detach_dish, report)

        logger.info(
            f"Dish {dish_id} cascade: {len(lists)} lists, {len(report.failed)} failures"
        )
        return report

    def _apply(self, documents: list, change: Callable, report: CascadeReport) -> None:
        """Apply ``change`` to each document and commit them one at a time."""
        for document in documents:
            document_id = document.id
            try:
                change(document)
                self.db.commit()
                report.updated.append(document_id)
            except Exception as e:
                self.db.rollback()
                report.failed.append(document_id)
                logger.error(f"Cascade update of {document_id} failed: {e}", exc_info=True)
