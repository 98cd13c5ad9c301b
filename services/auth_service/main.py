from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from shared.errors import register_exception_handlers
from shared.security import limiter, rate_limit_exceeded_handler

from .models import Customer, Dealer  # noqa: F401 (registers models with SQLAlchemy Base)
from .router import router, public_router

auth_app = FastAPI(
    title="Auth Service",
    version="2.0.0",
    description="JWT authentication for customers and dealers: register, login, token validation.",
)

register_exception_handlers(auth_app)

# --- SECURITY SETUP ---
auth_app.state.limiter = limiter
auth_app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

auth_app.include_router(public_router)
auth_app.include_router(router)
