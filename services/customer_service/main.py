from fastapi import FastAPI

from shared.errors import register_exception_handlers

from .router import router, public_router

customer_app = FastAPI(title="Customer Service", version="1.0.0")

register_exception_handlers(customer_app)

customer_app.include_router(public_router)
customer_app.include_router(router)
