"""
Dealer-scoped order visibility.

An order is visible to a dealer when at least one of its lines belongs to
one of the dealer's products, and the dealer only ever sees those lines.
Every dealer path (list, single get, single update, bulk update and the
analytics) goes through DealerScope so they cannot drift apart.
"""
from dataclasses import dataclass
from typing import Iterable, Sequence

from sqlalchemy import exists, select

from shared.errors import AuthorizationError, NotFoundError

from .models import Order, OrderItem


@dataclass(frozen=True)
class DealerScope:
    dealer_id: int

    def visible_clause(self):
        """SQL predicate selecting orders with at least one of the dealer's lines."""
        return exists(
            select(OrderItem.id).where(
                OrderItem.order_id == Order.id,
                OrderItem.dealer_id == self.dealer_id,
            )
        )

    def own_items(self, order: Order) -> list[OrderItem]:
        return [item for item in order.items if item.dealer_id == self.dealer_id]

    def owns(self, order: Order) -> bool:
        return any(item.dealer_id == self.dealer_id for item in order.items)

    def authorize(self, order: Order | None) -> Order:
        if order is None:
            raise NotFoundError("Order not found")
        if not self.owns(order):
            raise AuthorizationError("Access denied. This order does not contain any of your products.")
        return order

    def partition(self, order_ids: Sequence[int], orders: Iterable[Order]) -> tuple[list[int], list[int], list[int]]:
        """Split requested ids into (authorized, forbidden, missing), keeping request order."""
        by_id = {order.id: order for order in orders}
        authorized, forbidden, missing = [], [], []
        for order_id in dict.fromkeys(order_ids):
            order = by_id.get(order_id)
            if order is None:
                missing.append(order_id)
            elif self.owns(order):
                authorized.append(order_id)
            else:
                forbidden.append(order_id)
        return authorized, forbidden, missing
