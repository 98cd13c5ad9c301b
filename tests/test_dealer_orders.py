import pytest

from conftest import create_product, place_order


@pytest.fixture
async def catalog(client, dealer, other_dealer):
    own = await create_product(client, dealer, name="Tea", price=100)
    foreign = await create_product(client, other_dealer, name="Saffron", price=200)
    only_own = await place_order(client, [(own["id"], 1)])
    mixed = await place_order(client, [(own["id"], 2), (foreign["id"], 1)])
    only_foreign = await place_order(client, [(foreign["id"], 1)])
    return {"own": only_own, "mixed": mixed, "foreign": only_foreign}


async def test_list_shows_only_orders_with_own_lines(client, dealer, catalog):
    resp = await client.get("/api/admin/dealer/orders", headers=dealer["headers"])
    assert resp.status_code == 200
    page = resp.json()["data"]
    assert page["total"] == 2
    assert (page["limit"], page["skip"]) == (50, 0)
    assert {o["id"] for o in page["orders"]} == {catalog["own"]["id"], catalog["mixed"]["id"]}

    mixed = next(o for o in page["orders"] if o["id"] == catalog["mixed"]["id"])
    assert [i["name"] for i in mixed["items"]] == ["Tea"]
    assert mixed["item_count"] == 2
    assert mixed["dealer_subtotal"] == 200
    assert "total" not in mixed


async def test_list_paging_and_status_filter(client, dealer, catalog):
    resp = await client.get("/api/admin/dealer/orders", params={"limit": 1, "skip": 1}, headers=dealer["headers"])
    page = resp.json()["data"]
    assert page["total"] == 2
    assert len(page["orders"]) == 1

    resp = await client.get("/api/admin/dealer/orders", params={"status": "shipped"}, headers=dealer["headers"])
    assert resp.json()["data"]["total"] == 0

    resp = await client.get("/api/admin/dealer/orders", params={"status": "lost"}, headers=dealer["headers"])
    assert resp.status_code == 400


async def test_get_applies_the_same_scope(client, dealer, catalog):
    resp = await client.get(f"/api/admin/dealer/orders/{catalog['mixed']['id']}", headers=dealer["headers"])
    assert resp.status_code == 200
    assert len(resp.json()["data"]["items"]) == 1

    resp = await client.get(f"/api/admin/dealer/orders/{catalog['foreign']['id']}", headers=dealer["headers"])
    assert resp.status_code == 403

    resp = await client.get("/api/admin/dealer/orders/9999", headers=dealer["headers"])
    assert resp.status_code == 404

    # The shared order route gives dealers the same view
    resp = await client.get(f"/api/orders/{catalog['foreign']['id']}", headers=dealer["headers"])
    assert resp.status_code == 403
    resp = await client.get(f"/api/orders/{catalog['mixed']['id']}", headers=dealer["headers"])
    assert resp.json()["data"]["dealer_subtotal"] == 200


async def test_update_applies_the_same_scope(client, dealer, catalog):
    url = f"/api/admin/dealer/orders/{catalog['foreign']['id']}/status"
    resp = await client.put(url, json={"status": "confirmed"}, headers=dealer["headers"])
    assert resp.status_code == 403

    resp = await client.put(
        f"/api/orders/{catalog['foreign']['id']}", json={"notes": "mine now"}, headers=dealer["headers"]
    )
    assert resp.status_code == 403

    resp = await client.put(
        f"/api/orders/{catalog['mixed']['id']}", json={"notes": "Packed"}, headers=dealer["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["order"]["notes"] == "Packed"
    assert resp.json()["data"]["changed"] is False


async def test_bulk_counts(client, dealer, catalog):
    ids = [catalog["own"]["id"], catalog["mixed"]["id"], catalog["foreign"]["id"]]
    resp = await client.post(
        "/api/admin/dealer/orders/bulk-status", json={"order_ids": ids, "status": "confirmed"}, headers=dealer["headers"]
    )
    assert resp.status_code == 200
    result = resp.json()["data"]
    assert (result["found"], result["authorized"], result["modified"]) == (3, 2, 2)
    assert result["forbidden"] == [catalog["foreign"]["id"]]
    assert result["not_found"] == []

    mixed = await client.get(f"/api/admin/dealer/orders/{catalog['mixed']['id']}", headers=dealer["headers"])
    assert mixed.json()["data"]["status"] == "confirmed"


async def test_bulk_reports_missing_and_unchanged(client, dealer, catalog):
    own, mixed = catalog["own"]["id"], catalog["mixed"]["id"]
    await client.put(f"/api/admin/dealer/orders/{own}/status", json={"status": "confirmed"}, headers=dealer["headers"])

    resp = await client.post(
        "/api/admin/dealer/orders/bulk-status",
        json={"order_ids": [own, mixed, 9999], "status": "confirmed"},
        headers=dealer["headers"],
    )
    result = resp.json()["data"]
    assert result["requested"] == 3
    assert result["found"] == 2
    assert result["modified"] == 1
    assert result["not_found"] == [9999]
    assert result["unchanged"] == [own]


async def test_bulk_skips_illegal_transitions(client, dealer, catalog):
    own, mixed = catalog["own"]["id"], catalog["mixed"]["id"]
    await client.put(f"/api/admin/dealer/orders/{own}/status", json={"status": "cancelled"}, headers=dealer["headers"])

    resp = await client.post(
        "/api/admin/dealer/orders/bulk-status",
        json={"order_ids": [own, mixed], "status": "confirmed"},
        headers=dealer["headers"],
    )
    result = resp.json()["data"]
    assert result["modified"] == 1
    assert result["unchanged"] == [own]

    resp = await client.get(f"/api/admin/dealer/orders/{own}", headers=dealer["headers"])
    assert resp.json()["data"]["status"] == "cancelled"


async def test_status_walk_and_illegal_jump(client, dealer, catalog):
    url = f"/api/admin/dealer/orders/{catalog['own']['id']}/status"

    resp = await client.put(url, json={"status": "shipped"}, headers=dealer["headers"])
    assert resp.status_code == 409
    assert resp.json()["error"] == "Cannot move order from 'pending' to 'shipped'"

    resp = await client.put(url, json={}, headers=dealer["headers"])
    assert resp.status_code == 400

    for status in ("confirmed", "processing", "shipped", "delivered"):
        resp = await client.put(url, json={"status": status}, headers=dealer["headers"])
        assert resp.status_code == 200, resp.text
        assert resp.json()["data"]["changed"] is True
        assert resp.json()["data"]["order"]["status"] == status

    resp = await client.put(url, json={"status": "cancelled"}, headers=dealer["headers"])
    assert resp.status_code == 409


async def test_analytics_follow_the_scope(client, dealer, other_dealer, catalog):
    resp = await client.get("/api/admin/dealer/analytics/sales", headers=dealer["headers"])
    assert resp.json()["data"] == {"total_sales": 300, "total_orders": 2, "average_order_value": 150}

    await client.put(
        f"/api/admin/dealer/orders/{catalog['own']['id']}/status", json={"status": "cancelled"}, headers=dealer["headers"]
    )
    resp = await client.get("/api/admin/dealer/analytics/sales", headers=dealer["headers"])
    assert resp.json()["data"] == {"total_sales": 200, "total_orders": 1, "average_order_value": 200}

    resp = await client.get("/api/admin/dealer/analytics/orders", headers=dealer["headers"])
    assert resp.json()["data"]["status_counts"] == [
        {"status": "cancelled", "count": 1},
        {"status": "pending", "count": 1},
    ]

    resp = await client.get("/api/admin/dealer/analytics/sales", headers=other_dealer["headers"])
    assert resp.json()["data"]["total_sales"] == 400


async def test_dealer_products_are_scoped(client, dealer, other_dealer):
    await create_product(client, dealer, name="Tea")
    await create_product(client, dealer, name="Old Tea", is_active=False)
    await create_product(client, other_dealer, name="Saffron")

    resp = await client.get("/api/admin/dealer/products", headers=dealer["headers"])
    assert sorted(p["name"] for p in resp.json()["data"]["products"]) == ["Old Tea", "Tea"]

    resp = await client.get("/api/admin/dealer/products", params={"active": "true"}, headers=dealer["headers"])
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Tea"]


async def test_status_change_bill_shows_only_own_lines(client, dealer, other_dealer, catalog):
    url = f"/api/admin/dealer/orders/{catalog['mixed']['id']}/status"
    resp = await client.put(url, json={"status": "confirmed"}, headers=dealer["headers"])
    assert resp.status_code == 200
    bill = resp.json()["data"]["bill"]
    assert [i["name"] for i in bill["items"]] == ["Tea"]
    assert bill["dealer_subtotal"] == 200
    assert "total" not in bill
    assert "customer_details" not in bill

    # The other dealer re-applying the status sees the same bill through their own scope
    resp = await client.put(url, json={"status": "confirmed"}, headers=other_dealer["headers"])
    bill = resp.json()["data"]["bill"]
    assert [i["name"] for i in bill["items"]] == ["Saffron"]
    assert bill["dealer_subtotal"] == 200


async def test_rejected_update_leaves_the_order_untouched(client, dealer, catalog):
    order_id = catalog["own"]["id"]
    resp = await client.put(
        f"/api/orders/{order_id}", json={"notes": "Packed", "status": "delivered"}, headers=dealer["headers"]
    )
    assert resp.status_code == 409

    resp = await client.put(
        f"/api/orders/{order_id}", json={"notes": "Packed", "status": "lost"}, headers=dealer["headers"]
    )
    assert resp.status_code == 400

    resp = await client.get(f"/api/admin/dealer/orders/{order_id}", headers=dealer["headers"])
    order = resp.json()["data"]
    assert order["notes"] is None
    assert order["status"] == "pending"

    resp = await client.put(
        f"/api/orders/{order_id}", json={"notes": "Packed", "status": "confirmed"}, headers=dealer["headers"]
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert (data["order"]["notes"], data["order"]["status"], data["changed"]) == ("Packed", "confirmed", True)


async def test_bulk_counts_repeated_ids_once(client, dealer, catalog):
    own, foreign = catalog["own"]["id"], catalog["foreign"]["id"]
    resp = await client.post(
        "/api/admin/dealer/orders/bulk-status",
        json={"order_ids": [own, own, foreign, foreign, 9999, 9999], "status": "confirmed"},
        headers=dealer["headers"],
    )
    result = resp.json()["data"]
    assert (result["requested"], result["found"], result["authorized"], result["modified"]) == (3, 2, 1, 1)
    assert result["forbidden"] == [foreign]
    assert result["not_found"] == [9999]
