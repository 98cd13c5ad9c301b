from datetime import datetime, timezone

from conftest import SHIPPING, create_product, place_order, register
from services.bill_service.repository import BillRepository
from shared.config.database import AsyncSessionLocal


async def confirm(client, dealer, order_id, status="confirmed"):
    resp = await client.put(
        f"/api/admin/dealer/orders/{order_id}/status", json={"status": status}, headers=dealer["headers"]
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


async def test_confirming_generates_one_bill(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    order = await place_order(client, [(tea["id"], 2)], headers=customer["headers"])

    first = await confirm(client, dealer, order["id"])
    bill = first["bill"]
    assert bill["bill_number"] == f"BILL-{datetime.now(timezone.utc).year}-0001"
    assert bill["order_id"] == order["id"]
    assert bill["dealer_subtotal"] == 200
    assert bill["items"] == [{"name": "Tea", "quantity": 2, "price": 100, "total": 200}]
    assert bill["dealer_details"]["company_name"] == "Leaf & Co"

    again = await confirm(client, dealer, order["id"])
    assert again["changed"] is False
    assert again["bill"]["id"] == bill["id"]

    resp = await client.get("/api/bills/", headers=customer["headers"])
    bills = resp.json()["data"]["bills"]
    assert [b["id"] for b in bills] == [bill["id"]]
    assert bills[0]["order_status"] == "confirmed"
    assert bills[0]["total"] == order["total"] == 260
    assert bills[0]["customer_details"]["email"] == "asha@shop.io"
    assert bills[0]["customer_details"]["city"] == SHIPPING["city"]


async def test_delivery_reuses_the_existing_bill(client, customer, dealer):
    tea = await create_product(client, dealer, price=700)
    order = await place_order(client, [(tea["id"], 1)], headers=customer["headers"])

    bill_id = (await confirm(client, dealer, order["id"]))["bill"]["id"]
    for status in ("processing", "shipped"):
        assert (await confirm(client, dealer, order["id"], status))["bill"] is None
    delivered = await confirm(client, dealer, order["id"], "delivered")
    assert delivered["bill"]["id"] == bill_id

    resp = await client.get(f"/api/bills/{bill_id}", headers=customer["headers"])
    assert resp.json()["data"]["order_status"] == "delivered"
    assert len((await client.get("/api/bills/", headers=customer["headers"])).json()["data"]["bills"]) == 1


async def test_bulk_confirmation_bills_each_order_once(client, customer, dealer):
    tea = await create_product(client, dealer)
    first = await place_order(client, [(tea["id"], 1)], headers=customer["headers"])
    second = await place_order(client, [(tea["id"], 2)], headers=customer["headers"])

    for _ in range(2):
        resp = await client.post(
            "/api/admin/dealer/orders/bulk-status",
            json={"order_ids": [first["id"], second["id"]], "status": "confirmed"},
            headers=dealer["headers"],
        )
        assert resp.status_code == 200

    bills = (await client.get("/api/bills/", headers=customer["headers"])).json()["data"]["bills"]
    assert sorted(b["order_id"] for b in bills) == sorted([first["id"], second["id"]])
    assert len({b["bill_number"] for b in bills}) == 2


async def test_bills_are_private(client, customer, dealer):
    tea = await create_product(client, dealer)
    order = await place_order(client, [(tea["id"], 1)], headers=customer["headers"])
    bill_id = (await confirm(client, dealer, order["id"]))["bill"]["id"]

    stranger = await register(client, "customer", "ravi@shop.io")
    resp = await client.get(f"/api/bills/{bill_id}", headers=stranger["headers"])
    assert resp.status_code == 404
    assert (await client.get("/api/bills/", headers=stranger["headers"])).json()["data"]["bills"] == []

    resp = await client.get("/api/bills/", headers=dealer["headers"])
    assert resp.status_code == 403


async def test_guest_orders_are_billed_from_the_shipping_address(client, dealer):
    tea = await create_product(client, dealer)
    order = await place_order(client, [(tea["id"], 1)])
    assert (await confirm(client, dealer, order["id"]))["bill"] is not None

    async with AsyncSessionLocal() as db:
        bill = await BillRepository.get_by_order(db, order["id"])
    assert bill.customer_id is None
    assert bill.customer_details["name"] == SHIPPING["name"]
    assert bill.customer_details["email"] == ""
