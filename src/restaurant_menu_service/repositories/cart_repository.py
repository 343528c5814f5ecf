"""DynamoDB repository for the shared cart."""

import logging
from datetime import UTC, datetime

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table
from pydantic import ValidationError

from restaurant_menu_service.models.cart_models import CartItem, CartItemCreate
from restaurant_menu_service.observability.metrics import record_cart_item_added
from restaurant_menu_service.repositories.dynamodb_helpers import ensure_tables, new_id, scan_all

logger = logging.getLogger(__name__)

CART_TABLE = "cartitems"


class CartRepository:
    """Repository for cart rows.

    Holds at most one row per menu item; adding an item already in the cart
    increments that row's quantity.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_prefix: str = "") -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_prefix: Prefix prepended to the cart table name
        """
        self.dynamodb = dynamodb_resource
        self.table_name = f"{table_prefix}{CART_TABLE}"
        self.table: Table = dynamodb_resource.Table(self.table_name)

    def get_cart_items(self) -> list[CartItem]:
        """List every cart row.

        Returns:
            list: Well-formed cart rows (empty list if the read fails)
        """
        try:
            rows = scan_all(self.table)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting cart items: {e}")
            return []

        cart_items: list[CartItem] = []
        for row in rows:
            try:
                cart_items.append(CartItem.from_dynamodb_item(row))
            except (KeyError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping malformed cart row {row.get('id')}: {e}")

        return cart_items

    def add_to_cart(self, item: CartItemCreate) -> CartItem:
        """Add a menu item to the cart, merging with an existing row.

        Args:
            item: Menu item id and quantity to add

        Returns:
            CartItem: The inserted or updated row

        Raises:
            ClientError: If the write fails
        """
        now = datetime.now(UTC)

        try:
            existing = scan_all(self.table, FilterExpression=Attr("menu_item_id").eq(item.menu_item_id))

            if existing:
                response = self.table.update_item(
                    Key={"id": existing[0]["id"]},
                    UpdateExpression="SET quantity = quantity + :qty, updated_at = :now",
                    ExpressionAttributeValues={":qty": item.quantity, ":now": now.isoformat()},
                    ReturnValues="ALL_NEW",
                )
                cart_item = CartItem.from_dynamodb_item(response["Attributes"])
            else:
                cart_item = CartItem(
                    id=new_id(),
                    menu_item_id=item.menu_item_id,
                    quantity=item.quantity,
                    created_at=now,
                    updated_at=now,
                )
                self.table.put_item(Item=cart_item.to_dynamodb_item())

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error adding to cart: {e}")
            raise

        record_cart_item_added(item.quantity)
        return cart_item

    def remove_from_cart(self, cart_item_id: str) -> None:
        """Delete a cart row by id.

        Args:
            cart_item_id: Cart row identifier

        Raises:
            ClientError: If the delete fails
        """
        try:
            self.table.delete_item(Key={"id": cart_item_id})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error removing from cart: {e}")
            raise

    def clear_cart(self) -> None:
        """Delete every cart row.

        Raises:
            ClientError: If the scan or any delete fails
        """
        try:
            rows = scan_all(self.table, ProjectionExpression="id")
            with self.table.batch_writer() as batch:
                for row in rows:
                    batch.delete_item(Key={"id": row["id"]})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error clearing cart: {e}")
            raise

    def ensure_table_exists(self) -> list[str]:
        """Create the cart table if it is missing."""
        return ensure_tables(self.dynamodb, [self.table_name])
