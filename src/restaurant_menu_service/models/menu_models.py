"""Menu data models.

Menu items are stored one table per category. The category enumeration below is
the single source of truth for which categories exist, their display order, and
the table each one lives in.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, HttpUrl, field_serializer

RESTAURANT_ID = "6874cff2a880250859286de6"


class MenuCategory(str, Enum):
    """Enumeration of menu categories, in display order."""

    SOUPS = "soups"
    VEG_STARTER = "vegstarter"
    CHICKEN_STARTER = "chickenstarter"
    PRAWNS_STARTER = "prawnsstarter"
    SEAFOOD = "seafood"
    SPRING_ROLLS = "springrolls"
    MOMOS = "momos"
    GRAVIES = "gravies"
    POT_RICE = "potrice"
    RICE = "rice"
    RICE_WITH_GRAVY = "ricewithgravy"
    NOODLE = "noodle"
    NOODLE_WITH_GRAVY = "noodlewithgravy"
    THAI = "thai"
    CHOP_SUEY = "chopsuey"
    DESSERTS = "desserts"
    BEVERAGES = "beverages"
    EXTRA = "extra"

    @classmethod
    def parse(cls, value: str) -> "MenuCategory | None":
        """Look up a category by its identifier.

        Args:
            value: Category identifier (e.g., 'soups')

        Returns:
            MenuCategory if recognized, None otherwise
        """
        try:
            return cls(value)
        except ValueError:
            return None


# Physical table name (before prefixing) for each category
CATEGORY_TABLES: dict[MenuCategory, str] = {
    MenuCategory.SOUPS: "soups",
    MenuCategory.VEG_STARTER: "vegstarter",
    MenuCategory.CHICKEN_STARTER: "chickenstarter",
    MenuCategory.PRAWNS_STARTER: "prawnsstarter",
    MenuCategory.SEAFOOD: "seafood",
    MenuCategory.SPRING_ROLLS: "springrolls",
    MenuCategory.MOMOS: "momos",
    MenuCategory.GRAVIES: "gravies",
    MenuCategory.POT_RICE: "potrice",
    MenuCategory.RICE: "rice",
    MenuCategory.RICE_WITH_GRAVY: "ricewithgravy",
    MenuCategory.NOODLE: "noodle",
    MenuCategory.NOODLE_WITH_GRAVY: "noodlewithgravy",
    MenuCategory.THAI: "thai",
    MenuCategory.CHOP_SUEY: "chopsuey",
    MenuCategory.DESSERTS: "desserts",
    MenuCategory.BEVERAGES: "beverages",
    MenuCategory.EXTRA: "extra",
}


class MenuItemCreate(BaseModel):
    """Payload for adding a menu item."""

    name: str = Field(..., min_length=1, description="Item name")
    description: str = Field(..., min_length=1, description="Item description")
    price: Decimal = Field(..., gt=0, description="Item price")
    category: str = Field(..., min_length=1, description="Category identifier (e.g., 'soups')")
    is_veg: bool = Field(..., description="Whether the item is vegetarian")
    image: HttpUrl = Field(..., description="URL to item image")
    restaurant_id: str | None = Field(None, description="Ignored; items always belong to the restaurant")
    is_available: bool = Field(default=True, description="Whether item is currently available")


class MenuItem(BaseModel):
    """Menu item model."""

    id: str = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name")
    description: str = Field(default="", description="Item description")
    price: Decimal = Field(..., gt=0, description="Item price")
    category: MenuCategory = Field(..., description="Category the item is stored under")
    is_veg: bool = Field(default=False, description="Whether the item is vegetarian")
    image: str = Field(default="", description="URL to item image")
    restaurant_id: str = Field(default=RESTAURANT_ID, description="Restaurant this item belongs to")
    is_available: bool = Field(default=True, description="Whether item is currently available")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")
    version: int = Field(default=0, description="Document version counter", ge=0)

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        """Prices go over the wire as JSON numbers."""
        return float(price)

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category.value,
            "is_veg": self.is_veg,
            "image": self.image,
            "restaurant_id": self.restaurant_id,
            "is_available": self.is_available,
            "version": self.version,
        }

        if self.created_at is not None:
            item["created_at"] = self.created_at.isoformat()

        if self.updated_at is not None:
            item["updated_at"] = self.updated_at.isoformat()

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any], category: MenuCategory) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        The table an item is read from decides its category, whatever the
        stored attribute says.

        Args:
            item: DynamoDB item dictionary
            category: Category of the table the item was read from

        Returns:
            MenuItem: Parsed model instance
        """
        data: dict[str, Any] = {
            "id": item["id"],
            "name": item["name"],
            "price": Decimal(str(item["price"])),
            "category": category,
        }

        for key in ("description", "is_veg", "image", "restaurant_id", "is_available"):
            if key in item:
                data[key] = item[key]

        if "version" in item:
            data["version"] = int(item["version"])

        if "created_at" in item:
            data["created_at"] = datetime.fromisoformat(item["created_at"])

        if "updated_at" in item:
            data["updated_at"] = datetime.fromisoformat(item["updated_at"])

        return cls(**data)
