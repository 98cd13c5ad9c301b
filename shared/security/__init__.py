from .jwt_handler import create_access_token, create_user_token, verify_access_token
from .passwords import hash_password, verify_password
from .dependencies import (
    CUSTOMER,
    DEALER,
    ROLES,
    AuthContext,
    get_current_auth,
    get_optional_auth,
    require_customer,
    require_dealer,
)
from .rate_limiter import limiter, rate_limit_exceeded_handler, user_id_or_ip

__all__ = [
    "create_access_token",
    "create_user_token",
    "verify_access_token",
    "hash_password",
    "verify_password",
    "CUSTOMER",
    "DEALER",
    "ROLES",
    "AuthContext",
    "get_current_auth",
    "get_optional_auth",
    "require_customer",
    "require_dealer",
    "limiter",
    "rate_limit_exceeded_handler",
    "user_id_or_ip",
]
