"""Shopping list materialization.

A list's items are never edited line by line by the aggregation code: they are
recomputed from the dishes the list references plus any manually entered
entries, then sorted by ingredient name. Checked flags are carried over from the
previous items and can only be changed by an explicit ``checked`` value on a
manual entry.

Unresolvable dish or ingredient ids are skipped, never raised, so a list stays
usable after parts of the catalog have been deleted.
"""

import logging
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any, Protocol

from shoplist.database import normalize_id
from shoplist.schemas.shopping_list import ListItem, ListItemEntry

logger = logging.getLogger(__name__)

# Letters that French collation expands instead of decomposing
_LIGATURES = str.maketrans({"œ": "oe", "æ": "ae"})


class CatalogReader(Protocol):
    """Read access to the ingredient and dish catalogs."""

    def get_ingredient(self, ingredient_id: str) -> Any | None: ...

    def get_dish(self, dish_id: str) -> Any | None: ...


@dataclass(frozen=True)
class Aggregate:
    """Running total for one ingredient while a list is being materialized."""

    ingredient_id: str
    name: str
    aisle: str | None
    quantity: float | None
    unit: str | None

    @property
    def is_ambiguous(self) -> bool:
        """True once incompatible units made the quantity unknowable."""
        return self.quantity is None and self.unit is None


def clean_unit(unit: str | None) -> str | None:
    if unit is None:
        return None
    return unit.strip() or None


def accumulate(
    existing: Aggregate | None,
    contribution: Aggregate,
    take_identity: bool = False,
) -> Aggregate:
    """Fold one contribution into the aggregate of its ingredient.

    The first contribution defines the aggregate. Later ones add their quantity
    when both sides carry the same unit (case-insensitive); any other
    combination clears quantity and unit for good. Name and aisle stay those of
    the first contribution unless ``take_identity`` is set, which manual entries
    use to overwrite them.
    """
    unit = clean_unit(contribution.unit)
    if existing is None:
        return replace(contribution, unit=unit)

    if take_identity:
        existing = replace(existing, name=contribution.name, aisle=contribution.aisle)

    current_unit = clean_unit(existing.unit)
    if current_unit and unit and current_unit.casefold() == unit.casefold():
        total = (existing.quantity or 0) + (contribution.quantity or 0)
        return replace(existing, quantity=total, unit=current_unit)

    return replace(existing, quantity=None, unit=None)


def collation_key(name: str) -> tuple[str, str]:
    """Sort key following French collation rules.

    Case is ignored and accented letters sort with their base letter; names
    that only differ by accents are then ordered by their accented form.
    """
    folded = name.casefold().translate(_LIGATURES)
    base = "".join(
        char for char in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(char)
    )
    return (base, folded)


def build_checked_map(
    prior_items: Iterable[ListItem] | None,
    manual_items: Iterable[ListItemEntry] | None,
) -> dict[str, bool]:
    """Collect checked flags: prior state first, explicit manual values on top."""
    checked_map = {normalize_id(item.ingredient_id): item.checked for item in prior_items or []}
    for entry in manual_items or []:
        if entry.checked is not None:
            checked_map[normalize_id(entry.ingredient_id)] = entry.checked
    return checked_map


def read_ref(raw_ref: dict) -> tuple[str, float | None, str | None] | None:
    """Pull (ingredient_id, quantity, unit) out of a stored dish ref.

    Stored refs are read as they are, without re-checking the unit vocabulary,
    so a ref saved under older rules still contributes. Returns None for a ref
    that is not a mapping or has no ingredient id.
    """
    if not isinstance(raw_ref, dict) or not raw_ref.get("ingredient_id"):
        return None
    ingredient_id = raw_ref["ingredient_id"]
    quantity = raw_ref.get("quantity")
    unit = raw_ref.get("unit")
    return (
        str(ingredient_id),
        float(quantity) if isinstance(quantity, int | float) else None,
        unit if isinstance(unit, str) else None,
    )


def aggregate_dishes(catalog: CatalogReader, dish_ids: Iterable[str]) -> dict[str, Aggregate]:
    """Accumulate the ingredients of every resolvable dish, in input order.

    Dishes and ingredients are keyed by their normalized id, so two spellings
    of the same UUID resolve once and land on the same aggregate.
    """
    acc: dict[str, Aggregate] = {}

    for dish_id in dict.fromkeys(normalize_id(d) for d in dish_ids):
        dish = catalog.get_dish(dish_id)
        if dish is None:
            logger.debug(f"Skipping unknown dish {dish_id}")
            continue

        for raw_ref in dish.ingredients or []:
            ref = read_ref(raw_ref)
            if ref is None:
                logger.warning(f"Skipping malformed ingredient ref in dish {dish_id}: {raw_ref}")
                continue
            ref_id, quantity, unit = ref

            ingredient = catalog.get_ingredient(ref_id)
            if ingredient is None:
                logger.debug(f"Skipping unknown ingredient {ref_id} in dish {dish_id}")
                continue

            key = normalize_id(ingredient.id)
            contribution = Aggregate(
                ingredient_id=key,
                name=ingredient.name,
                aisle=ingredient.aisle,
                quantity=quantity,
                unit=unit,
            )
            acc[key] = accumulate(acc.get(key), contribution)

    return acc


def merge_manual(
    catalog: CatalogReader,
    acc: dict[str, Aggregate],
    manual_items: Iterable[ListItemEntry],
) -> None:
    """Merge manual entries into ``acc`` in place.

    The catalog wins for name and aisle; the entry's own snapshot is used when the
    ingredient no longer exists.
    """
    for entry in manual_items:
        ingredient = catalog.get_ingredient(entry.ingredient_id)
        if ingredient is not None:
            key = normalize_id(ingredient.id)
            name = ingredient.name
        else:
            key = normalize_id(entry.ingredient_id)
            name = entry.ingredient_name
        if ingredient is not None and ingredient.aisle is not None:
            aisle = ingredient.aisle
        else:
            aisle = entry.aisle

        contribution = Aggregate(
            ingredient_id=key,
            name=name,
            aisle=aisle,
            quantity=entry.quantity,
            unit=entry.unit,
        )
        acc[key] = accumulate(acc.get(key), contribution, take_identity=True)


def materialize(
    catalog: CatalogReader,
    dish_ids: Iterable[str] | None,
    manual_items: list[ListItemEntry] | None = None,
    prior_items: list[ListItem] | None = None,
) -> list[ListItem]:
    """Compute the full item list for a shopping list.

    Args:
        catalog: Ingredient and dish lookups.
        dish_ids: Dishes referenced by the list; duplicates are resolved once.
        manual_items: Entries typed in by the user for this edit.
        prior_items: The list's items before this edit, used for checked flags.

    Returns:
        One item per ingredient, sorted by name.
    """
    checked_map = build_checked_map(prior_items, manual_items)

    acc = aggregate_dishes(catalog, dish_ids or [])
    if manual_items:
        merge_manual(catalog, acc, manual_items)

    ordered = sorted(acc.values(), key=lambda agg: collation_key(agg.name))
    return [
        ListItem(
            ingredient_id=agg.ingredient_id,
            ingredient_name=agg.name,
            quantity=agg.quantity,
            unit=agg.unit,
            aisle=agg.aisle,
            checked=checked_map.get(agg.ingredient_id, False),
        )
        for agg in ordered
    ]
