from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Product


class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product) -> Product:
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def list_products(
        db: AsyncSession,
        dealer_id: int | None = None,
        category: str | None = None,
        featured: bool | None = None,
        active_only: bool = True,
    ) -> Sequence[Product]:
        stmt = select(Product)
        if dealer_id is not None:
            stmt = stmt.where(Product.dealer_id == dealer_id)
        if category:
            stmt = stmt.where(Product.category == category)
        if featured is not None:
            stmt = stmt.where(Product.is_featured == featured)
        if active_only:
            stmt = stmt.where(Product.is_active.is_(True))
        result = await db.execute(stmt.order_by(Product.created_at.desc(), Product.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[Product]:
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def get_products_by_ids(db: AsyncSession, product_ids: Iterable[int]) -> dict[int, Product]:
        ids = set(product_ids)
        if not ids:
            return {}
        result = await db.execute(select(Product).where(Product.id.in_(ids)))
        return {p.id: p for p in result.scalars().all()}

    @staticmethod
    async def update_product(db: AsyncSession, product: Product) -> Product:
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product: Product) -> None:
        await db.delete(product)
        await db.commit()
