import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFoundError, ValidationError
from shared.security import hash_password, verify_password
from services.auth_service.models import Customer
from services.auth_service.repository import CustomerRepository

from .schemas import CustomerProfileUpdate, PasswordChange

logger = structlog.get_logger(__name__)


def apply_password_change(account, change: PasswordChange) -> bool:
    """Shared by customer and dealer profile updates. Returns True when the hash changed."""
    if not (change.current_password and change.new_password):
        return False
    if not verify_password(change.current_password, account.password_hash):
        raise ValidationError("Current password is incorrect")
    account.password_hash = hash_password(change.new_password)
    return True


class CustomerService:

    @staticmethod
    async def get_customer(db: AsyncSession, customer_id: int) -> Customer:
        customer = await CustomerRepository.get_by_id(db, customer_id)
        if not customer:
            raise NotFoundError("Customer not found")
        return customer

    @staticmethod
    async def list_customers(db: AsyncSession):
        return await CustomerRepository.list_all(db)

    @staticmethod
    async def update_profile(db: AsyncSession, customer_id: int, data: CustomerProfileUpdate) -> Customer:
        customer = await CustomerService.get_customer(db, customer_id)

        password_changed = apply_password_change(customer, data)
        fields = data.model_dump(exclude_unset=True, exclude={"current_password", "new_password"})
        for field, value in fields.items():
            setattr(customer, field, value)

        customer = await CustomerRepository.save(db, customer)
        logger.info(
            "customer_profile_updated",
            customer_id=customer_id,
            fields=sorted(fields),
            password_changed=password_changed,
        )
        return customer
