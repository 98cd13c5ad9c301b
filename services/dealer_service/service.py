from collections import Counter

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import ConflictError, NotFoundError
from services.auth_service.models import Dealer
from services.auth_service.repository import DealerRepository
from services.customer_service.service import apply_password_change
from services.order_service.repository import OrderRepository
from services.order_service.status import CANCELLED
from services.order_service.visibility import DealerScope

from .schemas import DealerProfileUpdate, OrderStatusSummary, SalesSummary, StatusCount

logger = structlog.get_logger(__name__)


class DealerService:

    @staticmethod
    async def get_dealer(db: AsyncSession, dealer_id: int) -> Dealer:
        dealer = await DealerRepository.get_by_id(db, dealer_id)
        if not dealer:
            raise NotFoundError("Dealer not found")
        return dealer

    @staticmethod
    async def update_profile(db: AsyncSession, dealer_id: int, data: DealerProfileUpdate) -> Dealer:
        dealer = await DealerService.get_dealer(db, dealer_id)

        fields = data.model_dump(exclude_unset=True, exclude={"current_password", "new_password"})
        if fields.get("email"):
            email = str(fields["email"]).strip().lower()
            existing = await DealerRepository.get_by_email(db, email)
            if existing and existing.id != dealer_id:
                raise ConflictError("Email is already in use")
            fields["email"] = email
        elif "email" in fields:
            del fields["email"]

        password_changed = apply_password_change(dealer, data)
        for field, value in fields.items():
            setattr(dealer, field, value)

        dealer = await DealerRepository.save(db, dealer)
        logger.info(
            "dealer_profile_updated",
            dealer_id=dealer_id,
            fields=sorted(fields),
            password_changed=password_changed,
        )
        return dealer

    @staticmethod
    async def sales_summary(db: AsyncSession, dealer_id: int) -> SalesSummary:
        """Revenue from the dealer's own lines across visible, non-cancelled orders."""
        scope = DealerScope(dealer_id)
        orders, _ = await OrderRepository.list_for_dealer(db, scope)

        total_sales, order_count = 0.0, 0
        for order in orders:
            if order.status == CANCELLED:
                continue
            order_count += 1
            total_sales += sum(item.price * item.quantity for item in scope.own_items(order))

        return SalesSummary(
            total_sales=round(total_sales, 2),
            total_orders=order_count,
            average_order_value=round(total_sales / order_count, 2) if order_count else 0.0,
        )

    @staticmethod
    async def order_status_summary(db: AsyncSession, dealer_id: int) -> OrderStatusSummary:
        orders, _ = await OrderRepository.list_for_dealer(db, DealerScope(dealer_id))
        counts = Counter(order.status for order in orders)
        return OrderStatusSummary(
            status_counts=[StatusCount(status=status, count=count) for status, count in sorted(counts.items())]
        )
