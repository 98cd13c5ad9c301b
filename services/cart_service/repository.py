from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Cart, CartItem


class CartRepository:

    @staticmethod
    async def get_cart(db: AsyncSession, customer_id: int) -> Optional[Cart]:
        result = await db.execute(
            select(Cart).where(Cart.customer_id == customer_id).execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    async def get_or_create_cart(db: AsyncSession, customer_id: int) -> Cart:
        cart = await CartRepository.get_cart(db, customer_id)
        if cart:
            return cart
        try:
            db.add(Cart(customer_id=customer_id))
            await db.commit()
        except IntegrityError:
            # Created concurrently by another request for the same customer
            await db.rollback()
        return await CartRepository.get_cart(db, customer_id)

    @staticmethod
    async def save(db: AsyncSession, cart: Cart) -> Cart:
        db.add(cart)
        await db.commit()
        return await CartRepository.get_cart(db, cart.customer_id)

    @staticmethod
    def find_item(cart: Cart, product_id: int) -> Optional[CartItem]:
        for item in cart.items:
            if item.product_id == product_id:
                return item
        return None

    @staticmethod
    async def clear_items(db: AsyncSession, customer_id: int) -> None:
        """Deletes all items in the customer's cart and commits."""
        cart_ids = select(Cart.id).where(Cart.customer_id == customer_id)
        await db.execute(
            delete(CartItem).where(CartItem.cart_id.in_(cart_ids)).execution_options(synchronize_session=False)
        )
        await db.commit()
