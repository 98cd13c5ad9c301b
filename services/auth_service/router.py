from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import AUTH_RATE_LIMIT
from shared.schemas import ApiResponse
from shared.security import AuthContext, get_current_auth, limiter

from .schemas import AccountCreate, AccountLogin, TokenResponse, TokenStatus
from .service import AuthService

router = APIRouter(tags=["Authentication"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "auth", "status": "running"}


@router.post(
    "/register",
    response_model=ApiResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer or dealer account",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(request: Request, payload: AccountCreate, db: AsyncSession = Depends(get_db)):
    token = await AuthService.register(db, payload)
    return ApiResponse(data=token, message="User registered successfully")


@router.post(
    "/signup",
    response_model=ApiResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Alias of /register",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def signup(request: Request, payload: AccountCreate, db: AsyncSession = Depends(get_db)):
    token = await AuthService.register(db, payload)
    return ApiResponse(data=token, message=f"Account created successfully as {payload.role}")


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Authenticate and receive a JWT access token",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(request: Request, payload: AccountLogin, db: AsyncSession = Depends(get_db)):
    token = await AuthService.login(db, payload)
    return ApiResponse(data=token, message="Login successful")


@router.get("/verify-token", response_model=TokenStatus)
async def verify_token(auth: AuthContext = Depends(get_current_auth)):
    return TokenStatus(user_id=auth.user_id, role=auth.role)


@router.get("/me", response_model=ApiResponse[TokenStatus])
async def get_me(auth: AuthContext = Depends(get_current_auth)):
    return ApiResponse(data=TokenStatus(user_id=auth.user_id, role=auth.role))
