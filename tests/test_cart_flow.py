from conftest import SHIPPING, create_product, place_order


async def add_to_cart(client, customer, product_id, quantity=1):
    resp = await client.post(
        "/api/cart/", json={"product_id": product_id, "quantity": quantity}, headers=customer["headers"]
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def customer_orders(client, customer):
    resp = await client.get("/api/orders/", headers=customer["headers"])
    assert resp.status_code == 200
    return resp.json()["data"]["orders"]


async def test_cart_is_mirrored_into_one_pending_order(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    honey = await create_product(client, dealer, name="Honey", price=50)

    first = await add_to_cart(client, customer, tea["id"], 2)
    second = await add_to_cart(client, customer, honey["id"])
    assert first["pending_order_id"] == second["pending_order_id"] is not None

    orders = await customer_orders(client, customer)
    assert len(orders) == 1
    order = orders[0]
    assert order["id"] == second["pending_order_id"]
    assert order["status"] == "pending"
    assert order["placed_at"] is None
    assert (order["subtotal"], order["shipping"], order["tax"], order["total"]) == (250, 50, 12.5, 312.5)
    assert {(i["name"], i["quantity"]) for i in order["items"]} == {("Tea", 2), ("Honey", 1)}


async def test_adding_the_same_product_merges_lines(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    await add_to_cart(client, customer, tea["id"], 1)
    cart = await add_to_cart(client, customer, tea["id"], 2)
    assert [(i["product_id"], i["quantity"]) for i in cart["items"]] == [(tea["id"], 3)]


async def test_quantity_updates_flow_into_the_pending_order(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=400)
    cart = await add_to_cart(client, customer, tea["id"], 1)

    resp = await client.put(
        f"/api/cart/{customer['id']}/item/{tea['id']}", json={"quantity": 2}, headers=customer["headers"]
    )
    assert resp.status_code == 200
    [order] = await customer_orders(client, customer)
    assert order["id"] == cart["pending_order_id"]
    assert (order["subtotal"], order["shipping"], order["total"]) == (800, 0, 840)

    resp = await client.put(
        f"/api/cart/{customer['id']}/item/{tea['id']}", json={"quantity": 0}, headers=customer["headers"]
    )
    assert resp.json()["data"]["items"] == []
    [order] = await customer_orders(client, customer)
    assert order["items"] == []
    assert order["total"] == 0


async def test_cart_errors(client, customer, dealer):
    hidden = await create_product(client, dealer, is_active=False)
    resp = await client.post("/api/cart/", json={"product_id": hidden["id"]}, headers=customer["headers"])
    assert resp.status_code == 400

    resp = await client.post("/api/cart/", json={"product_id": 404}, headers=customer["headers"])
    assert resp.status_code == 404

    resp = await client.get(f"/api/cart/{customer['id'] + 1}", headers=customer["headers"])
    assert resp.status_code == 403

    resp = await client.put(
        f"/api/cart/{customer['id']}/item/1", json={"quantity": -1}, headers=customer["headers"]
    )
    assert resp.status_code == 400


async def test_checkout_converts_the_pending_order_and_clears_the_cart(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    cart = await add_to_cart(client, customer, tea["id"], 2)

    placed = await place_order(client, [(tea["id"], 3)], headers=customer["headers"])
    assert placed["id"] == cart["pending_order_id"]
    assert placed["placed_at"] is not None
    assert placed["shipping_address"]["city"] == SHIPPING["city"]
    assert placed["items"][0]["quantity"] == 3
    assert placed["total"] == 365

    resp = await client.get(f"/api/cart/{customer['id']}", headers=customer["headers"])
    assert resp.json()["data"]["items"] == []

    # The next cart starts a fresh pending order
    again = await add_to_cart(client, customer, tea["id"])
    assert again["pending_order_id"] != placed["id"]
    orders = await customer_orders(client, customer)
    assert sorted(o["id"] for o in orders) == sorted([placed["id"], again["pending_order_id"]])


async def test_guest_checkout_uses_catalog_prices(client, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    order = await place_order(client, [(tea["id"], 1), (tea["id"], 1)])
    assert order["customer_id"] is None
    assert order["items"] == [
        {"product_id": tea["id"], "name": "Tea", "price": 100, "quantity": 2, "image": "https://cdn.shop.io/img.png"}
    ]
    assert order["total"] == 260


async def test_checkout_rejects_unknown_products(client, customer):
    resp = await client.post(
        "/api/orders/",
        json={"items": [{"product_id": 77, "quantity": 1}], "shipping_address": SHIPPING},
        headers=customer["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Product 77 is not available"


async def test_customers_only_see_their_own_orders(client, customer, dealer):
    tea = await create_product(client, dealer)
    order = await place_order(client, [(tea["id"], 1)], headers=customer["headers"])

    resp = await client.post(
        "/api/auth/register", json={"email": "ravi@shop.io", "password": "secret123", "role": "customer"}
    )
    stranger = {"Authorization": f"Bearer {resp.json()['data']['access_token']}"}

    assert (await client.get(f"/api/orders/{order['id']}", headers=stranger)).status_code == 403
    assert (await client.get(f"/api/orders/{order['id']}", headers=customer["headers"])).status_code == 200
    assert (await client.get("/api/orders/9999", headers=customer["headers"])).status_code == 404


async def test_removing_an_item_shrinks_the_pending_order(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    honey = await create_product(client, dealer, name="Honey", price=50)
    await add_to_cart(client, customer, tea["id"], 2)
    cart = await add_to_cart(client, customer, honey["id"])

    resp = await client.delete(f"/api/cart/{customer['id']}/item/{honey['id']}", headers=customer["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Item removed from cart"
    assert [i["name"] for i in body["data"]["items"]] == ["Tea"]
    assert body["data"]["pending_order_id"] == cart["pending_order_id"]

    [order] = await customer_orders(client, customer)
    assert order["id"] == cart["pending_order_id"]
    assert [(i["name"], i["quantity"]) for i in order["items"]] == [("Tea", 2)]
    assert (order["subtotal"], order["shipping"], order["tax"], order["total"]) == (200, 50, 10, 260)

    resp = await client.delete(f"/api/cart/{customer['id']}/item/{honey['id']}", headers=customer["headers"])
    assert resp.status_code == 404


async def test_clearing_the_cart_empties_the_pending_order(client, customer, dealer):
    tea = await create_product(client, dealer, name="Tea", price=100)
    honey = await create_product(client, dealer, name="Honey", price=50)
    await add_to_cart(client, customer, tea["id"], 2)
    cart = await add_to_cart(client, customer, honey["id"])

    resp = await client.delete(f"/api/cart/{customer['id']}", headers=customer["headers"])
    assert resp.status_code == 200
    assert resp.json()["message"] == "Cart cleared successfully"
    assert resp.json()["data"]["items"] == []

    orders = await customer_orders(client, customer)
    assert len(orders) == 1
    order = orders[0]
    assert order["id"] == cart["pending_order_id"]
    assert order["status"] == "pending"
    assert order["items"] == []
    assert (order["subtotal"], order["shipping"], order["tax"], order["total"]) == (0, 0, 0, 0)

    again = await add_to_cart(client, customer, tea["id"])
    assert again["pending_order_id"] == cart["pending_order_id"]
