from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .settings import DATABASE_URL, DB_ECHO

engine = create_async_engine(DATABASE_URL, echo=DB_ECHO)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

Base = declarative_base()


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables() -> None:
    # Import models so they register with Base
    from services.auth_service import models as auth_models  # noqa: F401
    from services.product_service import models as product_models  # noqa: F401
    from services.order_service import models as order_models  # noqa: F401
    from services.cart_service import models as cart_models  # noqa: F401
    from services.bill_service import models as bill_models  # noqa: F401
    from services.feedback_service import models as feedback_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
