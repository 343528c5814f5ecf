"""Cart data models.

The cart is a single shared cart, not scoped to a user. It holds at most one
row per menu item; adding the same item again raises that row's quantity.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CartItemCreate(BaseModel):
    """Payload for adding a menu item to the cart."""

    menu_item_id: str = Field(..., min_length=1, description="Menu item to add")
    quantity: int = Field(default=1, gt=0, description="Quantity to add")


class CartItem(BaseModel):
    """Cart row model."""

    id: str = Field(..., description="Unique identifier for the cart row")
    menu_item_id: str = Field(..., description="Menu item held in the cart")
    quantity: int = Field(default=1, ge=1, description="Quantity of the menu item")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        return {
            "id": self.id,
            "menu_item_id": self.menu_item_id,
            "quantity": self.quantity,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "CartItem":
        """Create CartItem from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            CartItem: Parsed model instance
        """
        return cls(
            id=item["id"],
            menu_item_id=item["menu_item_id"],
            quantity=int(item["quantity"]),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )
