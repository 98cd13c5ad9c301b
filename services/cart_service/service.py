from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AuthorizationError, NotFoundError, ValidationError, run_side_effect
from services.order_service.service import OrderService
from services.product_service.repository import ProductRepository

from .models import Cart, CartItem
from .repository import CartRepository
from .schemas import CartItemCreate, CartResponse

logger = structlog.get_logger(__name__)


def present(cart: Optional[Cart], customer_id: int, pending_order_id: Optional[int] = None) -> CartResponse:
    if cart is None:
        return CartResponse(customer_id=customer_id, items=[], pending_order_id=pending_order_id)
    response = CartResponse.model_validate(cart)
    response.pending_order_id = pending_order_id
    return response


class CartService:

    @staticmethod
    def check_owner(path_customer_id: int, customer_id: int) -> None:
        if path_customer_id != customer_id:
            raise AuthorizationError("Access denied")

    @staticmethod
    async def _mirror(db: AsyncSession, cart: Cart) -> Optional[int]:
        """Keep the pending order in step with the cart. Failure never fails the cart call."""
        order = await run_side_effect(
            "sync_pending_order",
            OrderService.sync_pending_order(db, cart.customer_id, cart.items),
            session=db,
            customer_id=cart.customer_id,
        )
        return order.id if order is not None else None

    @staticmethod
    async def get_cart(db: AsyncSession, customer_id: int) -> CartResponse:
        cart = await CartRepository.get_cart(db, customer_id)
        return present(cart, customer_id)

    @staticmethod
    async def add_item(db: AsyncSession, customer_id: int, data: CartItemCreate) -> CartResponse:
        product = await ProductRepository.get_product_by_id(db, data.product_id)
        if not product:
            raise NotFoundError("Product not found")
        if not product.is_active:
            raise ValidationError("Product is not available")

        cart = await CartRepository.get_or_create_cart(db, customer_id)
        existing = CartRepository.find_item(cart, product.id)
        if existing:
            existing.quantity += data.quantity
        else:
            cart.items.append(
                CartItem(
                    product_id=product.id,
                    dealer_id=product.dealer_id,
                    name=product.name,
                    price=product.price,
                    quantity=data.quantity,
                    image=product.display_image,
                )
            )
        cart = await CartRepository.save(db, cart)
        logger.info("cart_item_added", customer_id=customer_id, product_id=product.id, quantity=data.quantity)

        pending_order_id = await CartService._mirror(db, cart)
        return present(await CartRepository.get_cart(db, customer_id), customer_id, pending_order_id)

    @staticmethod
    async def update_quantity(db: AsyncSession, customer_id: int, product_id: int, quantity: int) -> CartResponse:
        if quantity < 0:
            raise ValidationError("Valid quantity is required")

        cart = await CartRepository.get_cart(db, customer_id)
        if not cart:
            raise NotFoundError("Cart not found")
        item = CartRepository.find_item(cart, product_id)
        if not item:
            raise NotFoundError("Item not found in cart")

        if quantity == 0:
            cart.items.remove(item)
        else:
            item.quantity = quantity
        cart = await CartRepository.save(db, cart)
        logger.info("cart_item_updated", customer_id=customer_id, product_id=product_id, quantity=quantity)

        pending_order_id = await CartService._mirror(db, cart)
        return present(await CartRepository.get_cart(db, customer_id), customer_id, pending_order_id)

    @staticmethod
    async def remove_item(db: AsyncSession, customer_id: int, product_id: int) -> CartResponse:
        return await CartService.update_quantity(db, customer_id, product_id, 0)

    @staticmethod
    async def clear(db: AsyncSession, customer_id: int) -> CartResponse:
        cart = await CartRepository.get_cart(db, customer_id)
        if not cart:
            return present(None, customer_id)

        cart.items.clear()
        cart = await CartRepository.save(db, cart)
        logger.info("cart_cleared", customer_id=customer_id)

        pending_order_id = await CartService._mirror(db, cart)
        return present(await CartRepository.get_cart(db, customer_id), customer_id, pending_order_id)
