import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import DEFAULT_SELLER_DETAILS
from shared.errors import InternalError, NotFoundError
from shared.observability.metrics import ecomm_bills_generated_total
from services.auth_service.repository import CustomerRepository, DealerRepository

from .models import Bill
from .repository import BillRepository
from .schemas import BillResponse

logger = structlog.get_logger(__name__)

# Bill numbers are count-based, so two concurrent inserts can collide on the number
_MAX_INSERT_ATTEMPTS = 3


def present(bill: Bill, order_status: str | None = None) -> BillResponse:
    response = BillResponse.model_validate(bill)
    response.order_status = order_status
    return response


class BillService:

    @staticmethod
    async def _seller_details(db: AsyncSession, dealer_id: int | None) -> dict:
        details = dict(DEFAULT_SELLER_DETAILS)
        if dealer_id is not None:
            dealer = await DealerRepository.get_by_id(db, dealer_id)
            if dealer:
                details["company_name"] = dealer.company_name or details["company_name"]
                details["email"] = dealer.email or details["email"]
                details["phone"] = dealer.phone or details["phone"]
        return details

    @staticmethod
    async def _customer_details(db: AsyncSession, order) -> dict:
        address = order.shipping_address or {}
        details = {
            "name": address.get("name") or "Guest Customer",
            "email": "",
            "phone": address.get("phone") or "",
            "address": address.get("address") or "",
            "city": address.get("city") or "",
            "state": address.get("state") or "",
            "zip_code": address.get("zip_code") or "",
        }
        if order.customer_id:
            customer = await CustomerRepository.get_by_id(db, order.customer_id)
            if customer:
                details["email"] = customer.email or ""
                if details["name"] == "Guest Customer" and customer.name:
                    details["name"] = customer.name
        return details

    @staticmethod
    async def generate_for_order(db: AsyncSession, order, dealer_id: int | None = None) -> Bill:
        """
        Snapshot the order into a bill, at most once per order. Calling it
        again returns the bill that already exists.
        """
        existing = await BillRepository.get_by_order(db, order.id)
        if existing:
            return existing

        # Read everything up front: a rollback below expires the order instance
        order_id = order.id
        snapshot = {
            "order_id": order_id,
            "customer_id": order.customer_id,
            "items": [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": item.price,
                    "total": round(item.price * item.quantity, 2),
                }
                for item in order.items
            ],
            "subtotal": order.subtotal,
            "tax": order.tax,
            "shipping": order.shipping,
            "discount": order.discount or 0,
            "total": order.total,
            "payment_method": order.payment_method or "COD",
            "status": "delivered" if order.status == "delivered" else "confirmed",
        }

        try:
            snapshot["dealer_details"] = await BillService._seller_details(db, dealer_id)
            snapshot["customer_details"] = await BillService._customer_details(db, order)
            for _ in range(_MAX_INSERT_ATTEMPTS):
                bill = Bill(bill_number=await BillRepository.next_bill_number(db), **snapshot)
                try:
                    bill = await BillRepository.create(db, bill)
                except IntegrityError:
                    await db.rollback()
                    # Another request may have billed this order in the meantime
                    winner = await BillRepository.get_by_order(db, order_id)
                    if winner:
                        return winner
                    continue
                ecomm_bills_generated_total.inc()
                logger.info("bill_generated", bill_number=bill.bill_number, order_id=order_id)
                return bill
        except Exception:
            await db.rollback()
            raise
        raise InternalError(f"Could not allocate a bill number for order {order_id}")

    @staticmethod
    async def list_customer_bills(db: AsyncSession, customer_id: int) -> list[BillResponse]:
        rows = await BillRepository.list_for_customer(db, customer_id)
        return [present(bill, order_status) for bill, order_status in rows]

    @staticmethod
    async def get_customer_bill(db: AsyncSession, bill_id: int, customer_id: int) -> BillResponse:
        row = await BillRepository.get_for_customer(db, bill_id, customer_id)
        if not row:
            raise NotFoundError("Bill not found")
        bill, order_status = row
        return present(bill, order_status)
