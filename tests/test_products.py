from conftest import create_product
from shared.realtime import hub


async def test_create_accepts_numeric_stock_and_fills_image_url(client, dealer):
    product = await create_product(client, dealer, stock=3)
    assert product["dealer_id"] == dealer["id"]
    assert product["stock"] == {"quantity": 3, "low_stock_threshold": 10}
    assert product["is_low_stock"] is True
    assert product["image_url"] == "https://cdn.shop.io/img.png"


async def test_create_requires_an_image(client, dealer):
    resp = await client.post(
        "/api/products/",
        json={"name": "Tea", "description": "Leaf", "price": 10, "stock": 1},
        headers=dealer["headers"],
    )
    assert resp.status_code == 400
    assert "image" in resp.json()["error"]


async def test_customers_cannot_create_products(client, customer):
    resp = await client.post(
        "/api/products/",
        json={"name": "Tea", "description": "Leaf", "price": 10, "stock": 1, "image": "x.png"},
        headers=customer["headers"],
    )
    assert resp.status_code == 403


async def test_catalog_lists_active_products_only(client, dealer):
    await create_product(client, dealer, name="Visible")
    await create_product(client, dealer, name="Hidden", is_active=False)

    resp = await client.get("/api/products/")
    names = [p["name"] for p in resp.json()["data"]["products"]]
    assert names == ["Visible"]

    resp = await client.get("/api/products/", params={"active": "false"})
    assert len(resp.json()["data"]["products"]) == 2


async def test_catalog_filters(client, dealer):
    await create_product(client, dealer, name="Chai", category="Beverages", is_featured=True)
    await create_product(client, dealer, name="Rice", category="Grains")

    featured = await client.get("/api/products/", params={"featured": "true"})
    assert [p["name"] for p in featured.json()["data"]["products"]] == ["Chai"]

    grains = await client.get("/api/products/", params={"category": "Grains"})
    assert [p["name"] for p in grains.json()["data"]["products"]] == ["Rice"]


async def test_only_the_owner_may_update_or_delete(client, dealer, other_dealer):
    product = await create_product(client, dealer)

    resp = await client.put(f"/api/products/{product['id']}", json={"price": 1}, headers=other_dealer["headers"])
    assert resp.status_code == 403
    resp = await client.delete(f"/api/products/{product['id']}", headers=other_dealer["headers"])
    assert resp.status_code == 403

    resp = await client.put(
        f"/api/products/{product['id']}", json={"price": 120.5, "stock": 40}, headers=dealer["headers"]
    )
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["price"] == 120.5
    assert updated["stock"]["quantity"] == 40

    resp = await client.delete(f"/api/products/{product['id']}", headers=dealer["headers"])
    assert resp.json()["data"] == {"id": product["id"]}
    assert (await client.get(f"/api/products/{product['id']}")).status_code == 404


async def test_unknown_product_is_404(client):
    resp = await client.get("/api/products/999")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Product not found"}


async def test_product_mutations_are_broadcast(client, dealer):
    sent = []

    class Recorder:
        async def send_json(self, message):
            sent.append(message)

    socket = Recorder()
    hub._connections.add(socket)
    try:
        product = await create_product(client, dealer)
        await client.delete(f"/api/products/{product['id']}", headers=dealer["headers"])
        await hub.drain()
    finally:
        hub.disconnect(socket)

    assert [m["event"] for m in sent] == ["productAdded", "productDeleted"]
    assert sent[0]["data"]["id"] == product["id"]
