"""DynamoDB repository for users."""

import logging
from datetime import UTC, datetime
from typing import Any

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table
from pydantic import ValidationError

from restaurant_menu_service.exceptions import DuplicateUsernameError
from restaurant_menu_service.models.user_models import User, UserCreate
from restaurant_menu_service.repositories.dynamodb_helpers import ensure_tables, new_id, scan_all

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


def _parse_user(item: dict[str, Any]) -> User | None:
    try:
        return User.from_dynamodb_item(item)
    except (KeyError, ValueError, ValidationError) as e:
        logger.warning(f"Skipping malformed user {item.get('id')}: {e}")
        return None


class UserRepository:
    """Repository for user records keyed by id, with lookup by username."""

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_prefix: str = "") -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_prefix: Prefix prepended to the users table name
        """
        self.dynamodb = dynamodb_resource
        self.table_name = f"{table_prefix}{USERS_TABLE}"
        self.table: Table = dynamodb_resource.Table(self.table_name)

    def get_user(self, user_id: str) -> User | None:
        """Retrieve a user by id.

        Args:
            user_id: User identifier

        Returns:
            User if found, None otherwise
        """
        try:
            response = self.table.get_item(Key={"id": user_id})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting user: {e}")
            return None

        if "Item" not in response:
            return None

        return _parse_user(response["Item"])

    def get_user_by_username(self, username: str) -> User | None:
        """Retrieve a user by username.

        Args:
            username: Username to look up

        Returns:
            User if found, None otherwise
        """
        try:
            items = scan_all(self.table, FilterExpression=Attr("username").eq(username))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting user by username: {e}")
            return None

        if not items:
            return None

        return _parse_user(items[0])

    def create_user(self, user: UserCreate) -> User:
        """Create a user.

        Args:
            user: Validated username and password

        Returns:
            User: The stored user

        Raises:
            DuplicateUsernameError: If the username is taken
            ClientError: If the username check or the write fails
        """
        try:
            taken = scan_all(self.table, FilterExpression=Attr("username").eq(user.username))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error checking username availability: {e}")
            raise

        if taken:
            raise DuplicateUsernameError(user.username)

        now = datetime.now(UTC)
        new_user = User(
            id=new_id(),
            username=user.username,
            password=user.password,
            created_at=now,
            updated_at=now,
        )

        try:
            self.table.put_item(Item=new_user.to_dynamodb_item())
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error creating user: {e}")
            raise

        return new_user

    def ensure_table_exists(self) -> list[str]:
        """Create the users table if it is missing."""
        return ensure_tables(self.dynamodb, [self.table_name])
