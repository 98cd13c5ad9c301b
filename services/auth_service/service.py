import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AuthError, ConflictError
from shared.security import CUSTOMER, create_user_token, hash_password, verify_password

from .models import Customer, Dealer
from .repository import CustomerRepository, DealerRepository
from .schemas import AccountCreate, AccountLogin, AccountProfile, TokenResponse

logger = structlog.get_logger(__name__)

REDIRECTS = {"customer": "/index.html", "dealer": "/dealer2"}


def _normalize_email(email: str) -> str:
    return str(email).strip().lower()


class AuthService:

    @staticmethod
    def _repository(role: str):
        return CustomerRepository if role == CUSTOMER else DealerRepository

    @staticmethod
    async def register(db: AsyncSession, data: AccountCreate) -> TokenResponse:
        email = _normalize_email(data.email)
        repository = AuthService._repository(data.role)

        if await repository.get_by_email(db, email):
            raise ConflictError("User already exists with this email")

        if data.role == CUSTOMER:
            account = Customer(email=email, password_hash=hash_password(data.password), name=data.name)
        else:
            account = Dealer(
                email=email,
                password_hash=hash_password(data.password),
                company_name=data.company_name,
                name=data.name,
            )
        account = await repository.create(db, account)
        logger.info("account_registered", role=data.role, user_id=account.id)

        return TokenResponse(
            access_token=create_user_token(account.id, data.role),
            user_id=account.id,
            role=data.role,
            redirect_url=REDIRECTS[data.role],
            user=AccountProfile.model_validate(account),
        )

    @staticmethod
    async def login(db: AsyncSession, data: AccountLogin) -> TokenResponse:
        repository = AuthService._repository(data.role)
        account = await repository.get_by_email(db, _normalize_email(data.email))

        if not account or not verify_password(data.password, account.password_hash):
            logger.info("login_rejected", role=data.role)
            raise AuthError("Invalid credentials")

        logger.info("login_succeeded", role=data.role, user_id=account.id)
        return TokenResponse(
            access_token=create_user_token(account.id, data.role),
            user_id=account.id,
            role=data.role,
            redirect_url=REDIRECTS[data.role],
            user=AccountProfile.model_validate(account),
        )
