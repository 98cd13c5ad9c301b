from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    run_side_effect,
)
from shared.observability.metrics import (
    ecomm_open_carts,
    ecomm_order_status_transitions_total,
    ecomm_orders_placed_total,
)
from shared.realtime import NEW_ORDER, ORDER_UPDATED, hub
from shared.security import AuthContext
from services.auth_service.repository import CustomerRepository
from services.bill_service.models import Bill
from services.bill_service.service import BillService
from services.cart_service.repository import CartRepository
from services.product_service.repository import ProductRepository

from .models import Order, OrderItem
from .pricing import compute_totals
from .repository import OrderRepository
from .schemas import BulkStatusResult, CheckoutRequest, OrderResponse, OrderUpdate
from .status import PENDING, check_transition, is_billable, validate_status
from .visibility import DealerScope

logger = structlog.get_logger(__name__)

CART_ORDER_NOTE = "Order created from cart - awaiting checkout confirmation"
PLACEHOLDER_ADDRESS = {
    "address": "Address to be provided during checkout",
    "city": "City to be provided",
    "state": "State to be provided",
    "zip_code": "000000",
    "phone": "0000000000",
}


@dataclass
class StatusChange:
    order: Order
    changed: bool
    bill: Optional[Bill] = None


@dataclass(frozen=True)
class Line:
    product_id: int
    dealer_id: int
    name: str
    price: float
    quantity: int
    image: str = ""


def snapshot_lines(lines: Iterable) -> list[Line]:
    return [
        Line(line.product_id, line.dealer_id, line.name, line.price, line.quantity, line.image or "")
        for line in lines
    ]


def _copy_lines(lines: Iterable[Line]) -> list[OrderItem]:
    return [
        OrderItem(
            product_id=line.product_id,
            dealer_id=line.dealer_id,
            name=line.name,
            price=line.price,
            quantity=line.quantity,
            image=line.image,
        )
        for line in lines
    ]


def _publish(order: Order, *events: str) -> None:
    payload = OrderResponse.model_validate(order)
    for event in events:
        hub.publish(event, payload)


class OrderService:

    # --- customer side ---

    @staticmethod
    async def resolve_lines(db: AsyncSession, requested: Sequence) -> list[OrderItem]:
        """Price requested lines from the catalog and stamp each with its dealer."""
        quantities: dict[int, int] = {}
        for line in requested:
            quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity

        products = await ProductRepository.get_products_by_ids(db, quantities)
        lines = []
        for product_id, quantity in quantities.items():
            product = products.get(product_id)
            if product is None or not product.is_active:
                raise ValidationError(f"Product {product_id} is not available")
            lines.append(
                OrderItem(
                    product_id=product.id,
                    dealer_id=product.dealer_id,
                    name=product.name,
                    price=product.price,
                    quantity=quantity,
                    image=product.display_image,
                )
            )
        return lines

    @staticmethod
    async def checkout(db: AsyncSession, data: CheckoutRequest, auth: AuthContext | None) -> Order:
        lines = await OrderService.resolve_lines(db, data.items)
        customer_id = auth.user_id if auth and auth.is_customer else None

        order = None
        if customer_id is not None:
            # The cart mirror becomes the placed order
            order = await OrderRepository.get_open_cart_order(db, customer_id)
        converted = order is not None
        if order is None:
            order = Order(customer_id=customer_id, status=PENDING)

        order.items = lines
        compute_totals(lines).apply_to(order)
        order.shipping_address = data.shipping_address.model_dump()
        order.payment_method = data.payment_method or "COD"
        order.notes = data.notes or ("Order confirmed from checkout" if converted else None)
        order.placed_at = datetime.now(timezone.utc)
        order = await OrderRepository.save(db, order)

        channel = "customer" if customer_id is not None else "guest"
        ecomm_orders_placed_total.labels(channel=channel).inc()
        if converted:
            ecomm_open_carts.dec()
        logger.info("order_placed", order_id=order.id, channel=channel, converted=converted, total=order.total)

        if customer_id is not None:
            await run_side_effect(
                "clear_cart", CartRepository.clear_items(db, customer_id), session=db, customer_id=customer_id
            )
            order = await OrderRepository.get_order(db, order.id)

        _publish(order, ORDER_UPDATED, NEW_ORDER)
        return order

    @staticmethod
    async def list_customer_orders(db: AsyncSession, customer_id: int) -> Sequence[Order]:
        return await OrderRepository.list_for_customer(db, customer_id)

    @staticmethod
    async def get_customer_order(db: AsyncSession, order_id: int, customer_id: int) -> Order:
        order = await OrderRepository.get_order(db, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        if order.customer_id != customer_id:
            raise AuthorizationError("Access denied")
        return order

    @staticmethod
    async def sync_pending_order(db: AsyncSession, customer_id: int, cart_items: Iterable) -> Order:
        """
        Mirror the cart into the customer's single open pending order,
        creating it on first use. Totals are recomputed from the cart lines.
        """
        cart_items = snapshot_lines(cart_items)
        order = await OrderRepository.get_open_cart_order(db, customer_id)
        created = order is None
        if created:
            customer = await CustomerRepository.get_by_id(db, customer_id)
            order = Order(
                customer_id=customer_id,
                status=PENDING,
                payment_method="COD",
                notes=CART_ORDER_NOTE,
                shipping_address={"name": (customer and customer.name) or "Customer", **PLACEHOLDER_ADDRESS},
            )
        order.items = _copy_lines(cart_items)
        compute_totals(order.items).apply_to(order)

        try:
            order = await OrderRepository.save(db, order)
        except IntegrityError:
            # Lost the race to create the open order; update the winner instead
            await db.rollback()
            order = await OrderRepository.get_open_cart_order(db, customer_id)
            if order is None:
                raise
            created = False
            order.items = _copy_lines(cart_items)
            compute_totals(order.items).apply_to(order)
            order = await OrderRepository.save(db, order)

        if created:
            ecomm_open_carts.inc()
        logger.info("pending_order_synced", order_id=order.id, customer_id=customer_id, lines=len(order.items))

        _publish(order, ORDER_UPDATED)
        return order

    # --- dealer side ---

    @staticmethod
    async def list_dealer_orders(
        db: AsyncSession, dealer_id: int, status: str | None = None, limit: int = 50, skip: int = 0
    ) -> tuple[DealerScope, Sequence[Order], int]:
        scope = DealerScope(dealer_id)
        if status:
            validate_status(status)
        orders, total = await OrderRepository.list_for_dealer(db, scope, status=status, limit=limit, skip=skip)
        return scope, orders, total

    @staticmethod
    async def get_dealer_order(db: AsyncSession, order_id: int, dealer_id: int) -> tuple[DealerScope, Order]:
        scope = DealerScope(dealer_id)
        return scope, scope.authorize(await OrderRepository.get_order(db, order_id))

    @staticmethod
    async def _bill_if_due(db: AsyncSession, order: Order, dealer_id: int) -> Optional[Bill]:
        if not is_billable(order.status):
            return None
        return await run_side_effect(
            "generate_bill",
            BillService.generate_for_order(db, order, dealer_id=dealer_id),
            session=db,
            order_id=order.id,
        )

    @staticmethod
    async def set_status(db: AsyncSession, order_id: int, status: str | None, dealer_id: int) -> StatusChange:
        """
        Move one order the dealer can see to `status`. Raises NotFoundError,
        AuthorizationError, ValidationError or InvalidTransitionError; a repeat
        of the current status is a no-op. Entering confirmed or delivered bills
        the order once.
        """
        target = validate_status(status)
        scope, order = await OrderService.get_dealer_order(db, order_id, dealer_id)

        changed = check_transition(order.status, target)
        if changed:
            modified = await OrderRepository.transition(db, [order.id], target)
            if not modified:
                # Someone else moved the order between our read and the update
                current = await OrderRepository.get_order(db, order_id)
                if current is None:
                    raise NotFoundError("Order not found")
                if current.status != target:
                    raise InvalidTransitionError(current.status, target)
                changed = False
            else:
                ecomm_order_status_transitions_total.labels(status=target).inc()
                logger.info("order_status_changed", order_id=order_id, status=target, dealer_id=dealer_id)

        order = await OrderRepository.get_order(db, order_id)
        bill = await OrderService._bill_if_due(db, order, dealer_id)
        # Bill generation may roll back the session; reload before presenting
        order = await OrderRepository.get_order(db, order_id)

        if changed:
            _publish(order, ORDER_UPDATED)
        return StatusChange(order=order, changed=changed, bill=bill)

    @staticmethod
    async def update_order(db: AsyncSession, order_id: int, data: OrderUpdate, dealer_id: int) -> StatusChange:
        """Dealer edit of notes, address, payment method and status on a visible order."""
        scope, order = await OrderService.get_dealer_order(db, order_id, dealer_id)
        if data.status is not None:
            # Reject a bad status before any field is written
            check_transition(order.status, validate_status(data.status))

        fields = data.model_dump(exclude_unset=True, exclude={"status"})
        if fields:
            if "notes" in fields:
                order.notes = fields["notes"]
            if fields.get("shipping_address") is not None:
                order.shipping_address = fields["shipping_address"]
            if fields.get("payment_method"):
                order.payment_method = fields["payment_method"]
            await OrderRepository.save(db, order)
            logger.info("order_updated", order_id=order_id, dealer_id=dealer_id, fields=sorted(fields))

        if data.status is not None:
            change = await OrderService.set_status(db, order_id, data.status, dealer_id)
            if fields and not change.changed:
                _publish(change.order, ORDER_UPDATED)
            return change

        order = await OrderRepository.get_order(db, order_id)
        if fields:
            _publish(order, ORDER_UPDATED)
        return StatusChange(order=order, changed=False)

    @staticmethod
    async def bulk_set_status(
        db: AsyncSession, order_ids: Sequence[int], status: str | None, dealer_id: int
    ) -> BulkStatusResult:
        """
        Apply one status to many orders. Orders the dealer cannot see are left
        alone; the result separates missing, forbidden, modified and unchanged ids.
        Repeated ids count once in every figure.
        """
        target = validate_status(status)
        scope = DealerScope(dealer_id)
        order_ids = list(dict.fromkeys(order_ids))

        orders = await OrderRepository.get_orders(db, order_ids)
        authorized, forbidden, missing = scope.partition(order_ids, orders)
        previous = {order.id: order.status for order in orders}

        modified = await OrderRepository.transition(db, authorized, target)
        if modified:
            ecomm_order_status_transitions_total.labels(status=target).inc(modified)

        refreshed = await OrderRepository.get_orders(db, authorized)
        changed_ids = {o.id for o in refreshed if o.status == target and previous.get(o.id) != target}
        unchanged = [order_id for order_id in authorized if order_id not in changed_ids]

        settled = [o.id for o in refreshed if o.status == target]
        for order_id in settled:
            # Reload each time: a failed bill rolls the session back
            order = await OrderRepository.get_order(db, order_id)
            await OrderService._bill_if_due(db, order, dealer_id)

        for order in await OrderRepository.get_orders(db, [o for o in authorized if o in changed_ids]):
            _publish(order, ORDER_UPDATED)

        logger.info(
            "order_status_bulk_changed",
            dealer_id=dealer_id,
            status=target,
            requested=len(order_ids),
            authorized=len(authorized),
            modified=modified,
        )
        return BulkStatusResult(
            requested=len(order_ids),
            found=len(order_ids) - len(missing),
            authorized=len(authorized),
            modified=modified,
            not_found=missing,
            forbidden=forbidden,
            unchanged=unchanged,
        )
