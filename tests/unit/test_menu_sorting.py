"""Unit tests for menu presentation order."""

from decimal import Decimal

import pytest

from restaurant_menu_service.models.menu_models import MenuCategory, MenuItem
from restaurant_menu_service.services.menu_sorting import (
    CHICKEN_BUCKET,
    OTHER_BUCKET,
    PRAWN_BUCKET,
    VEG_BUCKET,
    menu_bucket,
    menu_sort_key,
    sort_menu_items,
)


def _item(name: str, item_id: str | None = None) -> MenuItem:
    return MenuItem(
        id=item_id or name,
        name=name,
        price=Decimal("100"),
        category=MenuCategory.EXTRA,
    )


@pytest.mark.unit
class TestMenuBucket:
    """Tests for menu_bucket."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Veg Fried Rice", VEG_BUCKET),
            ("vegetable clear soup", VEG_BUCKET),
            ("VEG MOMOS", VEG_BUCKET),
            ("Chicken Manchurian", CHICKEN_BUCKET),
            ("chicken65", CHICKEN_BUCKET),
            ("Prawn Tempura", PRAWN_BUCKET),
            ("Prawns Masala", PRAWN_BUCKET),
            ("Spring Roll", OTHER_BUCKET),
            ("Fish Fingers", OTHER_BUCKET),
            ("", OTHER_BUCKET),
        ],
    )
    def test_bucket_by_prefix(self, name: str, expected: int) -> None:
        """Test that names are grouped by their leading word."""
        assert menu_bucket(name) == expected

    def test_prefix_must_be_at_start(self) -> None:
        """Test that a keyword later in the name does not change the bucket."""
        assert menu_bucket("Crispy Chicken") == OTHER_BUCKET
        assert menu_bucket("Garlic Prawns") == OTHER_BUCKET
        assert menu_bucket("Mixed Veg") == OTHER_BUCKET

    def test_sort_key_uses_lowercase_name(self) -> None:
        """Test that the sort key pairs bucket with the lowercase name."""
        assert menu_sort_key("Chicken Lollipop") == (CHICKEN_BUCKET, "chicken lollipop")


@pytest.mark.unit
class TestSortMenuItems:
    """Tests for sort_menu_items."""

    def test_orders_buckets_then_names(self) -> None:
        """Test the documented example ordering."""
        items = [
            _item("Chicken Manchurian"),
            _item("Veg Fried Rice"),
            _item("Prawns Masala"),
            _item("Spring Roll"),
        ]

        result = sort_menu_items(items)

        assert [i.name for i in result] == [
            "Veg Fried Rice",
            "Chicken Manchurian",
            "Prawns Masala",
            "Spring Roll",
        ]

    def test_alphabetical_within_bucket_ignoring_case(self) -> None:
        """Test that ties on bucket are broken by lowercase name."""
        items = [
            _item("chicken tikka"),
            _item("Chicken Chilli"),
            _item("Chicken lollipop"),
            _item("Veg Momos"),
            _item("veg Chowmein"),
        ]

        result = sort_menu_items(items)

        assert [i.name for i in result] == [
            "veg Chowmein",
            "Veg Momos",
            "Chicken Chilli",
            "Chicken lollipop",
            "chicken tikka",
        ]

    def test_prawn_and_prawns_share_a_bucket(self) -> None:
        """Test that singular and plural prawn names sort together."""
        items = [_item("Prawns Salt Pepper"), _item("Fish Chilli"), _item("Prawn Crackers")]

        result = sort_menu_items(items)

        assert [i.name for i in result] == ["Prawn Crackers", "Prawns Salt Pepper", "Fish Chilli"]

    def test_equal_names_keep_input_order(self) -> None:
        """Test that the sort is stable for identical names."""
        items = [_item("Veg Soup", "b"), _item("veg soup", "a"), _item("VEG SOUP", "c")]

        result = sort_menu_items(items)

        assert [i.id for i in result] == ["b", "a", "c"]

    def test_returns_new_list(self) -> None:
        """Test that the input sequence is not modified."""
        items = [_item("Spring Roll"), _item("Veg Momos")]

        result = sort_menu_items(items)

        assert [i.name for i in items] == ["Spring Roll", "Veg Momos"]
        assert result is not items

    def test_empty_input(self) -> None:
        """Test that sorting nothing yields an empty list."""
        assert sort_menu_items([]) == []
