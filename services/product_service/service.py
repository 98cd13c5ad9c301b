import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AuthorizationError, NotFoundError
from shared.realtime import PRODUCT_ADDED, PRODUCT_DELETED, PRODUCT_UPDATED, hub

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductDeleted, ProductResponse, ProductUpdate

logger = structlog.get_logger(__name__)


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate, dealer_id: int) -> Product:
        product = Product(
            dealer_id=dealer_id,
            name=data.name.strip(),
            description=data.description.strip(),
            price=data.price,
            category=data.category.strip(),
            image=data.image,
            primary_image=data.primary_image,
            image_url=data.image_url,
            stock_quantity=data.stock.quantity,
            low_stock_threshold=data.stock.low_stock_threshold,
            is_active=data.is_active,
            is_featured=data.is_featured,
            weight=data.weight,
            tags=[t.strip() for t in data.tags if t.strip()],
        )
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id, dealer_id=dealer_id)

        hub.publish(PRODUCT_ADDED, ProductResponse.model_validate(product))
        return product

    @staticmethod
    async def list_products(
        db: AsyncSession,
        category: str | None = None,
        featured: bool | None = None,
        active_only: bool = True,
        dealer_id: int | None = None,
    ):
        return await ProductRepository.list_products(
            db, dealer_id=dealer_id, category=category, featured=featured, active_only=active_only
        )

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int) -> Product:
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    async def get_owned_product(db: AsyncSession, product_id: int, dealer_id: int) -> Product:
        product = await ProductService.get_product_by_id(db, product_id)
        if product.dealer_id != dealer_id:
            raise AuthorizationError("Access denied. You can only modify your own products.")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate, dealer_id: int) -> Product:
        product = await ProductService.get_owned_product(db, product_id, dealer_id)

        changes = data.model_dump(exclude_unset=True)
        stock = changes.pop("stock", None)
        if stock is not None:
            product.stock_quantity = stock["quantity"]
            product.low_stock_threshold = stock.get("low_stock_threshold", product.low_stock_threshold)
        for field, value in changes.items():
            if value is None and field not in ("image", "primary_image", "image_url", "weight"):
                continue
            setattr(product, field, value)
        if not changes.get("image_url") and (changes.get("image") or changes.get("primary_image")):
            product.image_url = changes.get("image") or changes.get("primary_image")

        product = await ProductRepository.update_product(db, product)
        logger.info("product_updated", product_id=product.id, dealer_id=dealer_id, fields=sorted(changes))

        hub.publish(PRODUCT_UPDATED, ProductResponse.model_validate(product))
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int, dealer_id: int) -> ProductDeleted:
        product = await ProductService.get_owned_product(db, product_id, dealer_id)
        await ProductRepository.delete_product(db, product)
        logger.info("product_deleted", product_id=product_id, dealer_id=dealer_id)

        deleted = ProductDeleted(id=product_id)
        hub.publish(PRODUCT_DELETED, deleted)
        return deleted
