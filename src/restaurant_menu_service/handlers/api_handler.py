"""FastAPI application for the menu, cart and user endpoints."""

import logging
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_menu_service.auth.api_dependencies import get_api_key_from_header
from restaurant_menu_service.auth.api_key_validator import APIKeyValidator
from restaurant_menu_service.exceptions import (
    ConfigurationError,
    DuplicateUsernameError,
    InvalidCategoryError,
)
from restaurant_menu_service.models.cart_models import CartItem, CartItemCreate
from restaurant_menu_service.models.menu_models import MenuCategory, MenuItem, MenuItemCreate
from restaurant_menu_service.models.user_models import UserCreate, UserResponse
from restaurant_menu_service.repositories.cart_repository import CartRepository
from restaurant_menu_service.repositories.menu_repository import MenuRepository
from restaurant_menu_service.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


def create_app(
    menu_repository_provider: Callable[[], MenuRepository],
    cart_repository_provider: Callable[[], CartRepository],
    user_repository_provider: Callable[[], UserRepository],
    api_keys: list[str],
) -> FastAPI:
    """Create and configure the FastAPI application.

    Repositories are obtained through providers on every request, so the
    database connection is only opened when a request first needs it.

    Args:
        menu_repository_provider: Returns the menu repository
        cart_repository_provider: Returns the cart repository
        user_repository_provider: Returns the user repository
        api_keys: List of valid API keys for the admin endpoints

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Menu Service API",
        description="Menu browsing, cart and user endpoints for the restaurant website",
        version="1.0.0",
    )

    app.state.menu_repository_provider = menu_repository_provider
    app.state.cart_repository_provider = cart_repository_provider
    app.state.user_repository_provider = user_repository_provider
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next: Callable) -> Response:
        response: Response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    @app.exception_handler(ClientError)
    @app.exception_handler(BotoCoreError)
    async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Storage operation failed", "details": str(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # /menu-items answers every verb other than GET and OPTIONS with a JSON 405
        if exc.status_code == 405 and request.url.path == "/menu-items":
            return JSONResponse(status_code=405, content={"error": "Method not allowed"})
        return await http_exception_handler(request, exc)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error(f"Configuration error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Service misconfigured", "details": str(exc)},
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate API key."""
        return get_api_key_from_header(x_api_key=x_api_key, validator=app.state.api_key_validator)

    @app.options("/menu-items", include_in_schema=False)
    async def menu_items_preflight() -> Response:
        """Answer cross-origin preflight requests with an empty body."""
        return Response(status_code=200)

    @app.get("/menu-items", response_model=list[MenuItem], tags=["Menu"])
    def get_menu_items(category: str | None = None) -> JSONResponse:
        """Get menu items, either for one category or across all of them.

        Args:
            category: Optional category identifier to filter by

        Returns:
            JSON array of menu items in presentation order
        """
        if category and MenuCategory.parse(category) is None:
            return JSONResponse(status_code=400, content={"error": "Invalid category"})

        try:
            repository: MenuRepository = app.state.menu_repository_provider()

            if category:
                logger.info(f"Fetching items for category: {category}")
                items = repository.get_menu_items_by_category(category)
                logger.info(f"Found {len(items)} items in {category} category")
            else:
                logger.info("Fetching all menu items...")
                items = repository.get_menu_items()

            return JSONResponse(status_code=200, content=jsonable_encoder(items))

        except Exception as e:
            logger.exception(f"Failed to fetch menu items: {e}")
            return JSONResponse(
                status_code=500,
                content={"error": "Failed to fetch menu items", "details": str(e)},
            )

    @app.get("/menu-items/{item_id}", response_model=MenuItem, tags=["Menu"])
    def get_menu_item(item_id: str) -> MenuItem:
        """Get a single menu item by id.

        Raises:
            HTTPException: 404 if no category holds the item
        """
        item = app.state.menu_repository_provider().get_menu_item(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"Menu item {item_id} not found")
        return item

    @app.get("/categories", response_model=list[str], tags=["Menu"])
    def get_categories() -> list[str]:
        """List category identifiers in display order."""
        categories: list[str] = app.state.menu_repository_provider().get_categories()
        return categories

    @app.post(
        "/admin/menu-items",
        response_model=MenuItem,
        status_code=201,
        tags=["Admin"],
    )
    def add_menu_item(
        item: MenuItemCreate,
        _api_key: str = Depends(validate_api_key),
    ) -> MenuItem:
        """Add a menu item to its category.

        Raises:
            HTTPException: 400 if the category is not on the menu
        """
        try:
            menu_item: MenuItem = app.state.menu_repository_provider().add_menu_item(item)
        except InvalidCategoryError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        logger.info(f"Menu item {menu_item.id} added to {menu_item.category.value}")
        return menu_item

    @app.get("/cart", response_model=list[CartItem], tags=["Cart"])
    def get_cart_items() -> list[CartItem]:
        """List the cart."""
        items: list[CartItem] = app.state.cart_repository_provider().get_cart_items()
        return items

    @app.post("/cart", response_model=CartItem, tags=["Cart"])
    def add_to_cart(item: CartItemCreate) -> CartItem:
        """Add a menu item to the cart, merging with any existing row for it."""
        cart_item: CartItem = app.state.cart_repository_provider().add_to_cart(item)
        return cart_item

    @app.delete("/cart/{cart_item_id}", status_code=204, tags=["Cart"])
    def remove_from_cart(cart_item_id: str) -> Response:
        """Remove one cart row."""
        app.state.cart_repository_provider().remove_from_cart(cart_item_id)
        return Response(status_code=204)

    @app.delete("/cart", status_code=204, tags=["Cart"])
    def clear_cart() -> Response:
        """Remove every cart row."""
        app.state.cart_repository_provider().clear_cart()
        return Response(status_code=204)

    @app.post("/users", response_model=UserResponse, status_code=201, tags=["Users"])
    def create_user(user: UserCreate) -> UserResponse:
        """Create a user.

        Raises:
            HTTPException: 409 if the username is taken
        """
        try:
            created = app.state.user_repository_provider().create_user(user)
        except DuplicateUsernameError as e:
            raise HTTPException(status_code=409, detail=str(e)) from e

        return UserResponse.from_user(created)

    @app.get("/users/{user_id}", response_model=UserResponse, tags=["Users"])
    def get_user(user_id: str) -> UserResponse:
        """Get a user by id.

        Raises:
            HTTPException: 404 if the user does not exist
        """
        user = app.state.user_repository_provider().get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail=f"User {user_id} not found")
        return UserResponse.from_user(user)

    return app
