from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from shared.errors import AuthError, AuthorizationError
from .jwt_handler import verify_access_token

CUSTOMER = "customer"
DEALER = "dealer"
ROLES = (CUSTOMER, DEALER)

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    role: str

    @property
    def is_customer(self) -> bool:
        return self.role == CUSTOMER

    @property
    def is_dealer(self) -> bool:
        return self.role == DEALER


def _decode(token: str | None) -> AuthContext | None:
    if not token:
        return None
    payload = verify_access_token(token)
    if payload is None:
        return None
    sub, role = payload.get("sub"), payload.get("role")
    if sub is None or role not in ROLES:
        return None
    try:
        return AuthContext(user_id=int(sub), role=role)
    except (TypeError, ValueError):
        return None


async def get_current_auth(request: Request, token: str = Depends(oauth2_scheme)) -> AuthContext:
    """Dependency to validate the JWT and return the caller's id and role."""
    if not token:
        raise AuthError("Missing Authorization header")

    auth = _decode(token)
    if auth is None:
        raise AuthError("Invalid or expired token")

    # Store in request state for downstream use (like rate limiting)
    request.state.auth = auth
    return auth


async def get_optional_auth(request: Request, token: str = Depends(oauth2_scheme)) -> AuthContext | None:
    """Like get_current_auth, but a missing or invalid token means an anonymous caller."""
    auth = _decode(token)
    request.state.auth = auth
    return auth


async def require_customer(auth: AuthContext = Depends(get_current_auth)) -> AuthContext:
    if not auth.is_customer:
        raise AuthorizationError("Access denied. Customer role required.")
    return auth


async def require_dealer(auth: AuthContext = Depends(get_current_auth)) -> AuthContext:
    if not auth.is_dealer:
        raise AuthorizationError("Access denied. Dealer role required.")
    return auth
