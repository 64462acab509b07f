"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state. IDs returned by creation
endpoints are tracked so follow-up requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """A simulated shopper and the catalogue they buy from."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None


@dataclass
class FlashSaleState:
    """One low-stock product that many shoppers race for."""

    user_id: str | None = None
    product_id: str | None = None
    initial_stock: int = 0
    orders_won: int = 0
    orders_rejected: int = 0
