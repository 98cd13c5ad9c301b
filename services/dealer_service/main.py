from fastapi import FastAPI

from shared.errors import register_exception_handlers

from .router import router, public_router

dealer_app = FastAPI(title="Dealer Service", version="1.0.0")

register_exception_handlers(dealer_app)

dealer_app.include_router(public_router)
dealer_app.include_router(router)
