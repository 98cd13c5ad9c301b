import structlog

from shared.realtime import NEW_ORDER, ORDER_UPDATED, PRODUCT_ADDED, PRODUCT_DELETED, PRODUCT_UPDATED

from .api import DealerApiClient
from .store import DashboardStore

logger = structlog.get_logger(__name__)

DELIVERED = "delivered"


class DashboardSync:
    """
    Keeps a DashboardStore in line with the server. Broadcast payloads are
    only hints: products are filtered to this dealer's active ones, and
    orders are always re-read through the dealer endpoints.
    """

    def __init__(self, client: DealerApiClient, store: DashboardStore, dealer_id: int):
        self.client = client
        self.store = store
        self.dealer_id = dealer_id

    async def reload(self) -> None:
        products = await self.client.list_products()
        orders = await self.client.list_all_orders()
        self.store.replace_inventory(products)
        self.store.replace_orders(orders)
        for order in orders:
            if order["status"] == DELIVERED:
                self.store.record_transaction(order)
        self.store.save()
        logger.info("dashboard_reloaded", products=len(products), orders=len(orders))

    async def on_reconnect(self) -> None:
        # Events missed while disconnected are not replayed
        await self.reload()

    async def apply(self, message: dict) -> bool:
        """Apply one broadcast. Returns True when the cache changed."""
        event, data = message.get("event"), message.get("data") or {}

        if event in (PRODUCT_ADDED, PRODUCT_UPDATED):
            if data.get("dealer_id") != self.dealer_id:
                return False
            if data.get("is_active"):
                self.store.upsert_product(data)
            else:
                self.store.remove_product(data["id"])
        elif event == PRODUCT_DELETED:
            if data.get("id") not in self.store.state.inventory:
                return False
            self.store.remove_product(data["id"])
        elif event in (ORDER_UPDATED, NEW_ORDER):
            order = await self.client.get_order(data["id"])
            if order is None:
                if data["id"] not in self.store.state.orders:
                    return False
                self.store.remove_order(data["id"])
            else:
                self.store.upsert_order(order)
                if order["status"] == DELIVERED:
                    self.store.record_transaction(order)
        else:
            return False

        self.store.save()
        return True
