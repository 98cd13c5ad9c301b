"""
Local cache for the dealer dashboard.

The cache is a convenience: anything in it may be stale and is replaced
wholesale on reload. A missing, empty or unreadable file yields an empty
cache instead of an error.
"""
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger(__name__)

OPEN_STATUSES = ("pending", "confirmed", "processing", "shipped")


class DashboardState(BaseModel):
    orders: dict[int, dict] = {}
    inventory: dict[int, dict] = {}
    transactions: list[dict] = []
    settings: dict = {}


class DashboardStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self.state = self._load()

    def _load(self) -> DashboardState:
        if self.path is None or not self.path.exists():
            return DashboardState()
        try:
            raw = self.path.read_text(encoding="utf-8")
            if not raw.strip():
                return DashboardState()
            return DashboardState.model_validate_json(raw)
        except (OSError, ValidationError) as exc:
            logger.warning("dashboard_cache_unreadable", path=str(self.path), error=str(exc))
            return DashboardState()

    def save(self) -> bool:
        if self.path is None:
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self.state.model_dump_json(), encoding="utf-8")
            return True
        except OSError as exc:
            logger.warning("dashboard_cache_write_failed", path=str(self.path), error=str(exc))
            return False

    def invalidate(self) -> None:
        """Drop cached server data. Local settings survive."""
        self.state = DashboardState(settings=self.state.settings)
        self.save()

    # --- orders ---

    @property
    def processing_orders(self) -> list[dict]:
        return [o for o in self.state.orders.values() if o.get("status") in OPEN_STATUSES]

    def replace_orders(self, orders: list[dict]) -> None:
        self.state.orders = {o["id"]: o for o in orders}

    def upsert_order(self, order: dict) -> None:
        self.state.orders[order["id"]] = order

    def remove_order(self, order_id: int) -> None:
        self.state.orders.pop(order_id, None)

    # --- inventory ---

    def replace_inventory(self, products: list[dict]) -> None:
        self.state.inventory = {p["id"]: p for p in products}

    def upsert_product(self, product: dict) -> None:
        self.state.inventory[product["id"]] = product

    def remove_product(self, product_id: int) -> None:
        self.state.inventory.pop(product_id, None)

    # --- bookkeeping ---

    def record_transaction(self, order: dict) -> bool:
        """Book a delivered order as income once. Returns False if already booked."""
        if any(t["order_id"] == order["id"] for t in self.state.transactions):
            return False
        self.state.transactions.append(
            {
                "order_id": order["id"],
                "type": "income",
                "amount": order.get("dealer_subtotal", 0.0),
                "date": order.get("updated_at") or order.get("placed_at"),
            }
        )
        return True

    def update_settings(self, **settings) -> None:
        self.state.settings.update(settings)
        self.save()
