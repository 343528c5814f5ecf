"""Custom metrics for the menu service."""

from opentelemetry import metrics

meter = metrics.get_meter("menu-svc")

menu_items_served_counter = meter.create_counter(
    name="menu_items_served_total",
    description="Total number of menu items returned by category",
    unit="1",
)

category_fetch_failure_counter = meter.create_counter(
    name="menu_category_fetch_failure_total",
    description="Total number of failed category table reads",
    unit="1",
)

cart_items_added_counter = meter.create_counter(
    name="cart_items_added_total",
    description="Total quantity of menu items added to the cart",
    unit="1",
)


def record_menu_items_served(category: str, item_count: int) -> None:
    """Record menu items returned for a category.

    Args:
        category: Category identifier, or "all" for the full menu
        item_count: Number of items returned
    """
    menu_items_served_counter.add(item_count, {"category": category})


def record_category_fetch_failure(category: str, error_type: str) -> None:
    """Record a failed read of a category table.

    Args:
        category: Category identifier
        error_type: Type of error that occurred
    """
    category_fetch_failure_counter.add(1, {"category": category, "error_type": error_type})


def record_cart_item_added(quantity: int) -> None:
    """Record menu items added to the cart.

    Args:
        quantity: Quantity added
    """
    cart_items_added_counter.add(quantity)
