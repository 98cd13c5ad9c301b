from fastapi import FastAPI

from shared.errors import register_exception_handlers

from .router import router, public_router

feedback_app = FastAPI(title="Feedback Service", version="1.0.0")

register_exception_handlers(feedback_app)

feedback_app.include_router(public_router)
feedback_app.include_router(router)
