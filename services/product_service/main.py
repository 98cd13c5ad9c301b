from fastapi import FastAPI

from shared.errors import register_exception_handlers

from .models import Product  # noqa: F401 (registers model with SQLAlchemy Base)
from .router import router, public_router

product_app = FastAPI(
    title="Product Service",
    version="2.0.0"
)

register_exception_handlers(product_app)

product_app.include_router(public_router)
product_app.include_router(router)
