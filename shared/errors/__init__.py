from .exceptions import (
    AppError,
    AuthError,
    AuthorizationError,
    ConflictError,
    InternalError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from .handlers import register_exception_handlers
from .side_effects import run_side_effect

__all__ = [
    "AppError",
    "AuthError",
    "AuthorizationError",
    "ConflictError",
    "InternalError",
    "InvalidTransitionError",
    "NotFoundError",
    "ValidationError",
    "register_exception_handlers",
    "run_side_effect",
]
