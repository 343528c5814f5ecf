"""User data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Payload for creating a user."""

    username: str = Field(..., min_length=3, description="Unique username")
    password: str = Field(..., min_length=6, description="Password, stored as given")


class User(BaseModel):
    """Stored user model."""

    id: str = Field(..., description="Unique identifier for the user")
    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="Password, stored as given")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "User":
        """Create User from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            User: Parsed model instance
        """
        return cls(
            id=item["id"],
            username=item["username"],
            password=item["password"],
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )


class UserResponse(BaseModel):
    """User representation returned by the API (no password)."""

    id: str
    username: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build a response model from a stored user."""
        return cls(
            id=user.id,
            username=user.username,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
