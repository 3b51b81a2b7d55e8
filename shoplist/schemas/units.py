"""Quantity unit vocabularies."""

DISH_UNITS = frozenset({"g", "kg", "paquet"})
LIST_UNITS = DISH_UNITS | {"unité"}


def check_unit(unit: str | None, allowed: frozenset[str]) -> str | None:
    """Validate a unit against a vocabulary; blank units are accepted as given."""
    if unit is None or not unit.strip():
        return unit
    if unit.strip().lower() not in allowed:
        raise ValueError(f"Unit must be one of: {', '.join(sorted(allowed))}")
    return unit
