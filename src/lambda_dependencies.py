"""Shared dependency factory for Lambda handlers.

Dependencies are created lazily on first use and cached at module level, so a
warm Lambda container reuses the same DynamoDB resource for every invocation.
Creating the FastAPI app does not touch the database.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from restaurant_menu_service.exceptions import ConfigurationError
from restaurant_menu_service.handlers.api_handler import create_app
from restaurant_menu_service.observability import configure_logging, setup_observability
from restaurant_menu_service.repositories.cart_repository import CartRepository
from restaurant_menu_service.repositories.menu_repository import MenuRepository
from restaurant_menu_service.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PREFIX = "mingsdb-"

# Module-level caches for Lambda container reuse
_dynamodb_resource: Any | None = None
_menu_repository: MenuRepository | None = None
_cart_repository: CartRepository | None = None
_user_repository: UserRepository | None = None
_fastapi_app: FastAPI | None = None


def get_database_url() -> str:
    """Read the database connection string from the environment.

    Returns:
        The DynamoDB endpoint URL

    Raises:
        ConfigurationError: If neither DATABASE_URL nor DYNAMODB_ENDPOINT is set
    """
    database_url = os.getenv("DATABASE_URL") or os.getenv("DYNAMODB_ENDPOINT")
    if not database_url:
        raise ConfigurationError("Database connection string not provided")
    return database_url


def get_table_prefix() -> str:
    """Return the table name prefix (the logical database name)."""
    return os.getenv("DYNAMODB_TABLE_PREFIX", DEFAULT_TABLE_PREFIX)


def get_dynamodb_resource() -> Any:
    """Create or retrieve cached DynamoDB resource.

    Returns:
        Boto3 DynamoDB resource configured for environment

    Raises:
        ConfigurationError: If the connection string is missing
    """
    global _dynamodb_resource

    if _dynamodb_resource is not None:
        return _dynamodb_resource

    endpoint_url = get_database_url()
    region = os.getenv("AWS_REGION", "us-east-1")
    access_key = os.getenv("AWS_ACCESS_KEY_ID")
    secret_key = os.getenv("AWS_SECRET_ACCESS_KEY")

    logger.info(f"Connecting to DynamoDB at {endpoint_url} in region {region}")

    if access_key and secret_key:
        _dynamodb_resource = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )
    else:
        # Default credential chain (IAM role, shared config, ...)
        _dynamodb_resource = boto3.resource("dynamodb", endpoint_url=endpoint_url, region_name=region)

    return _dynamodb_resource


def get_menu_repository() -> MenuRepository:
    """Create or retrieve cached menu repository."""
    global _menu_repository

    if _menu_repository is None:
        _menu_repository = MenuRepository(
            dynamodb_resource=get_dynamodb_resource(), table_prefix=get_table_prefix()
        )
        logger.info("Menu repository initialized")

    return _menu_repository


def get_cart_repository() -> CartRepository:
    """Create or retrieve cached cart repository."""
    global _cart_repository

    if _cart_repository is None:
        _cart_repository = CartRepository(
            dynamodb_resource=get_dynamodb_resource(), table_prefix=get_table_prefix()
        )
        logger.info("Cart repository initialized")

    return _cart_repository


def get_user_repository() -> UserRepository:
    """Create or retrieve cached user repository."""
    global _user_repository

    if _user_repository is None:
        _user_repository = UserRepository(
            dynamodb_resource=get_dynamodb_resource(), table_prefix=get_table_prefix()
        )
        logger.info("User repository initialized")

    return _user_repository


def get_admin_api_keys() -> list[str]:
    """Read admin API keys from ADMIN_API_KEY (comma-separated).

    Returns:
        Configured keys, or a development key when none are set
    """
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - using development key")
        api_keys = ["dummy-key-for-development"]

    return api_keys


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    _fastapi_app = create_app(
        menu_repository_provider=get_menu_repository,
        cart_repository_provider=get_cart_repository,
        user_repository_provider=get_user_repository,
        api_keys=get_admin_api_keys(),
    )

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Initialize Lambda environment with logging and observability.

    The cached FastAPI app is instrumented here, so request spans are
    recorded for API Gateway traffic too.

    Should be called once during Lambda cold start.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)
    setup_observability(
        get_fastapi_app(),
        enable_exporters=os.getenv("ENABLE_OTEL_EXPORTERS", "false").lower() == "true",
    )

    logger.info("Lambda environment initialized")
