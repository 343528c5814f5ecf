"""Shared pytest fixtures and configuration for all tests."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest

# Keep entry point modules from building the app at import time
os.environ.setdefault("ENVIRONMENT", "test")


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table keyed by ``id``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.items: dict[str, dict[str, Any]] = {}

    def scan(self, FilterExpression: Any = None, **_: Any) -> dict[str, Any]:  # noqa: N803
        rows = list(self.items.values())
        if FilterExpression is not None:
            attr, value = FilterExpression.get_expression()["values"]
            rows = [row for row in rows if row.get(attr.name) == value]
        return {"Items": [dict(row) for row in rows]}

    def get_item(self, Key: dict[str, Any]) -> dict[str, Any]:  # noqa: N803
        item = self.items.get(Key["id"])
        return {"Item": dict(item)} if item is not None else {}

    def put_item(self, Item: dict[str, Any]) -> dict[str, Any]:  # noqa: N803
        self.items[Item["id"]] = dict(Item)
        return {}

    def update_item(
        self,
        Key: dict[str, Any],  # noqa: N803
        UpdateExpression: str,  # noqa: N803
        ExpressionAttributeValues: dict[str, Any],  # noqa: N803
        ReturnValues: str = "NONE",  # noqa: N803
    ) -> dict[str, Any]:
        # Only the cart quantity increment is modelled
        row = self.items[Key["id"]]
        row["quantity"] = row["quantity"] + ExpressionAttributeValues[":qty"]
        row["updated_at"] = ExpressionAttributeValues[":now"]
        return {"Attributes": dict(row)}

    def delete_item(self, Key: dict[str, Any]) -> dict[str, Any]:  # noqa: N803
        self.items.pop(Key["id"], None)
        return {}

    @contextmanager
    def batch_writer(self) -> Iterator["FakeTable"]:
        yield self


class FakeDynamoDB:
    """In-memory stand-in for a boto3 DynamoDB service resource."""

    def __init__(self) -> None:
        self.tables: dict[str, FakeTable] = {}

    def Table(self, name: str) -> FakeTable:  # noqa: N802
        return self.tables.setdefault(name, FakeTable(name))


@pytest.fixture
def fake_dynamodb() -> FakeDynamoDB:
    """Fixture providing an empty in-memory DynamoDB resource."""
    return FakeDynamoDB()


@pytest.fixture
def menu_item_record() -> dict[str, Any]:
    """Fixture providing a stored menu item as DynamoDB returns it."""
    now = datetime(2025, 7, 14, 10, 30, tzinfo=UTC).isoformat()
    return {
        "id": "6874d1a2a880250859286e01",
        "name": "Veg Manchow Soup",
        "description": "Spicy soup with vegetables and fried noodles",
        "price": Decimal("149"),
        "category": "soups",
        "is_veg": True,
        "image": "https://images.example.com/veg-manchow.jpg",
        "restaurant_id": "6874cff2a880250859286de6",
        "is_available": True,
        "created_at": now,
        "updated_at": now,
        "version": Decimal("0"),
    }


def make_menu_record(item_id: str, name: str, price: str = "199") -> dict[str, Any]:
    """Build a minimal stored menu item."""
    return {"id": item_id, "name": name, "price": Decimal(price), "description": name}


@pytest.fixture
def menu_record_factory() -> Any:
    """Fixture exposing the menu record builder."""
    return make_menu_record
