from dataclasses import dataclass
from typing import Iterable, Protocol

from shared.config.settings import FLAT_SHIPPING_FEE, FREE_SHIPPING_THRESHOLD, TAX_RATE


class PricedLine(Protocol):
    price: float
    quantity: int


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    shipping: float
    discount: float
    tax: float
    total: float

    def apply_to(self, order) -> None:
        order.subtotal = self.subtotal
        order.shipping = self.shipping
        order.discount = self.discount
        order.tax = self.tax
        order.total = self.total


def _money(value: float) -> float:
    return round(value + 0.0, 2)


def compute_totals(items: Iterable[PricedLine], discount: float = 0.0) -> OrderTotals:
    """
    Shipping is free above FREE_SHIPPING_THRESHOLD and a flat fee otherwise;
    an empty order costs nothing. Tax is TAX_RATE of the subtotal.
    total = subtotal + shipping - discount + tax
    """
    items = list(items)
    subtotal = _money(sum(item.price * item.quantity for item in items))
    if not items:
        shipping = 0.0
    elif subtotal > FREE_SHIPPING_THRESHOLD:
        shipping = 0.0
    else:
        shipping = FLAT_SHIPPING_FEE
    discount = _money(min(max(discount, 0.0), subtotal))
    tax = _money(subtotal * TAX_RATE)
    total = _money(subtotal + shipping - discount + tax)
    return OrderTotals(subtotal=subtotal, shipping=shipping, discount=discount, tax=tax, total=total)
