from fastapi import FastAPI

from shared.errors import register_exception_handlers

from .models import Bill  # noqa: F401 (registers model with SQLAlchemy Base)
from .router import router, public_router

bill_app = FastAPI(title="Bill Service", version="1.0.0")

register_exception_handlers(bill_app)

bill_app.include_router(public_router)
bill_app.include_router(router)
