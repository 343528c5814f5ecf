"""Small DynamoDB helpers shared by the repositories."""

import logging
import uuid
from collections.abc import Iterable
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate an opaque 24 character document id."""
    return uuid.uuid4().hex[:24]


def scan_all(table: Table, **kwargs: Any) -> list[dict[str, Any]]:
    """Scan a whole table, following pagination.

    Args:
        table: DynamoDB table to scan
        **kwargs: Extra scan arguments (e.g., FilterExpression)

    Returns:
        list: Every item returned by the scan
    """
    response = table.scan(**kwargs)
    items = list(response.get("Items", []))

    while "LastEvaluatedKey" in response:
        response = table.scan(ExclusiveStartKey=response["LastEvaluatedKey"], **kwargs)
        items.extend(response.get("Items", []))

    return items


def ensure_tables(dynamodb_resource: DynamoDBServiceResource, table_names: Iterable[str]) -> list[str]:
    """Create any of the given tables that do not exist yet.

    Tables are keyed by a string hash key ``id`` and use on-demand billing.
    Failures are logged and do not raise.

    Args:
        dynamodb_resource: Boto3 DynamoDB resource
        table_names: Table names that should exist

    Returns:
        list: Names of the tables that were created
    """
    created: list[str] = []

    try:
        existing = {table.name for table in dynamodb_resource.tables.all()}

        for table_name in table_names:
            if table_name in existing:
                continue

            dynamodb_resource.create_table(
                TableName=table_name,
                KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
            created.append(table_name)
            logger.info(f"Created table: {table_name}")

    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error ensuring tables exist: {e}")

    return created
