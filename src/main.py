"""Main application entry point for the restaurant menu service.

This module builds the FastAPI application for running the service locally
(uvicorn) or behind any ASGI server.
"""

import logging
import os

from fastapi import FastAPI

from lambda_dependencies import (
    get_cart_repository,
    get_dynamodb_resource,
    get_fastapi_app,
    get_menu_repository,
    get_user_repository,
)
from restaurant_menu_service.exceptions import ConfigurationError
from restaurant_menu_service.observability import configure_logging, setup_observability

logger = logging.getLogger(__name__)


def ensure_storage() -> list[str]:
    """Create any missing category, cart and user tables.

    Returns:
        Names of the tables that were created (empty if storage is not configured)
    """
    try:
        get_dynamodb_resource()
    except ConfigurationError as e:
        logger.warning(f"Skipping table check: {e}")
        return []

    created = get_menu_repository().ensure_tables_exist()
    created += get_cart_repository().ensure_table_exists()
    created += get_user_repository().ensure_table_exists()

    if created:
        logger.info(f"Created tables: {', '.join(created)}")

    return created


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Makes sure the DynamoDB tables exist (when storage is configured)
    3. Creates the FastAPI app
    4. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing restaurant menu service...")

    ensure_storage()

    app = get_fastapi_app()
    setup_observability(app)

    logger.info("Restaurant menu service initialized successfully")
    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
