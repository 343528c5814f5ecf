"""DynamoDB repository for menu items.

Each menu category lives in its own table. This repository is the only place
that knows the category-to-table mapping; callers work with category names.

Reads degrade to empty results (or None) when DynamoDB fails, and the failure
is logged. Writes raise.
"""

import logging
from datetime import UTC, datetime

from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table
from pydantic import ValidationError

from restaurant_menu_service.exceptions import InvalidCategoryError
from restaurant_menu_service.models.menu_models import (
    CATEGORY_TABLES,
    RESTAURANT_ID,
    MenuCategory,
    MenuItem,
    MenuItemCreate,
)
from restaurant_menu_service.observability import traced
from restaurant_menu_service.observability.metrics import (
    record_category_fetch_failure,
    record_menu_items_served,
)
from restaurant_menu_service.repositories.dynamodb_helpers import ensure_tables, new_id, scan_all
from restaurant_menu_service.services.menu_sorting import sort_menu_items

logger = logging.getLogger(__name__)


class MenuRepository:
    """Repository for menu items spread across one table per category."""

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_prefix: str = "") -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_prefix: Prefix prepended to every category table name
        """
        self.dynamodb = dynamodb_resource
        self.table_prefix = table_prefix
        self.category_tables: dict[MenuCategory, Table] = {
            category: dynamodb_resource.Table(f"{table_prefix}{table_name}")
            for category, table_name in CATEGORY_TABLES.items()
        }

    def get_categories(self) -> list[str]:
        """Return the category identifiers in display order."""
        return [category.value for category in MenuCategory]

    @traced("menu_repository.get_menu_items_by_category")
    def get_menu_items_by_category(self, category: str) -> list[MenuItem]:
        """Fetch the items of one category, in presentation order.

        Args:
            category: Category identifier (e.g., 'soups')

        Returns:
            list: Sorted menu items (empty if the category is unknown or the read fails)
        """
        parsed = MenuCategory.parse(category)
        if parsed is None:
            logger.error(f'Category "{category}" not found')
            return []

        try:
            items = self._load_category(parsed)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting menu items for category {parsed.value}: {e}")
            record_category_fetch_failure(parsed.value, type(e).__name__)
            return []

        record_menu_items_served(parsed.value, len(items))
        return sort_menu_items(items)

    @traced("menu_repository.get_menu_items")
    def get_menu_items(self) -> list[MenuItem]:
        """Fetch the items of every category, in presentation order.

        A category whose table is missing or fails to read is skipped.

        Returns:
            list: Sorted menu items across all readable categories
        """
        all_items: list[MenuItem] = []

        for category in self.category_tables:
            try:
                all_items.extend(self._load_category(category))
            except (ClientError, BotoCoreError) as e:
                logger.warning(f"Collection {category.value} not found or unreadable: {e}")
                record_category_fetch_failure(category.value, type(e).__name__)

        logger.info(f"Found {len(all_items)} menu items across all categories")
        record_menu_items_served("all", len(all_items))
        return sort_menu_items(all_items)

    @traced("menu_repository.get_menu_item")
    def get_menu_item(self, item_id: str) -> MenuItem | None:
        """Find a menu item by id.

        The category of an id is not known up front, so every category table
        is probed in turn.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found in any category, None if missing or malformed
        """
        for category, table in self.category_tables.items():
            try:
                response = table.get_item(Key={"id": item_id})
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Error getting menu item {item_id} from {category.value}: {e}")
                continue

            if "Item" not in response:
                continue

            try:
                return MenuItem.from_dynamodb_item(response["Item"], category)
            except (KeyError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping malformed item {item_id} in {category.value}: {e}")

        return None

    def add_menu_item(self, item: MenuItemCreate) -> MenuItem:
        """Insert a new menu item into its category's table.

        Args:
            item: Validated menu item payload

        Returns:
            MenuItem: The stored item

        Raises:
            InvalidCategoryError: If the category is not on the menu
            ClientError: If the write fails
        """
        category = MenuCategory.parse(item.category)
        if category is None:
            raise InvalidCategoryError(item.category)

        now = datetime.now(UTC)
        menu_item = MenuItem(
            id=new_id(),
            name=item.name,
            description=item.description,
            price=item.price,
            category=category,
            is_veg=item.is_veg,
            image=str(item.image),
            restaurant_id=RESTAURANT_ID,
            is_available=item.is_available,
            created_at=now,
            updated_at=now,
            version=0,
        )

        try:
            self.category_tables[category].put_item(Item=menu_item.to_dynamodb_item())
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error adding menu item: {e}")
            raise

        logger.info(f"Added menu item {menu_item.id} to {category.value}")
        return menu_item

    def ensure_tables_exist(self) -> list[str]:
        """Create any missing category tables.

        Returns:
            list: Names of the tables that were created
        """
        return ensure_tables(self.dynamodb, [table.name for table in self.category_tables.values()])

    def _load_category(self, category: MenuCategory) -> list[MenuItem]:
        """Read every item stored in a category's table, skipping malformed ones."""
        items: list[MenuItem] = []

        for raw in scan_all(self.category_tables[category]):
            try:
                items.append(MenuItem.from_dynamodb_item(raw, category))
            except (KeyError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping malformed item {raw.get('id')} in {category.value}: {e}")

        return items
