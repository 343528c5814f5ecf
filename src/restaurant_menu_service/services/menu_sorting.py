"""Presentation order for menu items.

Veg dishes come first, then chicken, then prawn dishes, then everything else.
Within a group items are alphabetical by lowercase name.
"""

from collections.abc import Iterable

from restaurant_menu_service.models.menu_models import MenuItem

VEG_BUCKET = 1
CHICKEN_BUCKET = 2
PRAWN_BUCKET = 3
OTHER_BUCKET = 4


def menu_bucket(name: str) -> int:
    """Return the display group for a dish name.

    Args:
        name: Dish name (any case)

    Returns:
        int: 1 for veg, 2 for chicken, 3 for prawn/prawns, 4 otherwise
    """
    lowered = name.lower()
    if lowered.startswith("veg"):
        return VEG_BUCKET
    if lowered.startswith("chicken"):
        return CHICKEN_BUCKET
    if lowered.startswith("prawns") or lowered.startswith("prawn"):
        return PRAWN_BUCKET
    return OTHER_BUCKET


def menu_sort_key(name: str) -> tuple[int, str]:
    """Sort key for a dish name: (bucket, lowercase name)."""
    return menu_bucket(name), name.lower()


def sort_menu_items(items: Iterable[MenuItem]) -> list[MenuItem]:
    """Return menu items in presentation order.

    Args:
        items: Menu items in any order

    Returns:
        list: New list sorted by bucket, then lowercase name
    """
    return sorted(items, key=lambda item: menu_sort_key(item.name))
