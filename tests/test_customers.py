from conftest import PASSWORD


async def test_profile_roundtrip(client, customer):
    resp = await client.get("/api/customers/profile", headers=customer["headers"])
    assert resp.status_code == 200
    profile = resp.json()["data"]
    assert profile["email"] == "asha@shop.io"
    assert profile["currency"] == "INR"
    assert "password_hash" not in profile

    resp = await client.put(
        "/api/customers/profile",
        json={"phone": "9000000001", "city": "Pune", "gender": "female", "newsletter": True},
        headers=customer["headers"],
    )
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert (updated["phone"], updated["city"], updated["newsletter"]) == ("9000000001", "Pune", True)
    assert updated["name"] == "Asha Rao"


async def test_password_change_requires_current_password(client, customer):
    resp = await client.put(
        "/api/customers/profile",
        json={"current_password": "wrong", "new_password": "fresh-pass"},
        headers=customer["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Current password is incorrect"

    resp = await client.put(
        "/api/customers/profile", json={"new_password": "fresh-pass"}, headers=customer["headers"]
    )
    assert resp.status_code == 400

    resp = await client.put(
        "/api/customers/profile",
        json={"current_password": PASSWORD, "new_password": "fresh-pass"},
        headers=customer["headers"],
    )
    assert resp.status_code == 200

    login = await client.post(
        "/api/auth/login", json={"email": "asha@shop.io", "password": "fresh-pass", "role": "customer"}
    )
    assert login.status_code == 200


async def test_invalid_gender_is_rejected(client, customer):
    resp = await client.put("/api/customers/profile", json={"gender": "robot"}, headers=customer["headers"])
    assert resp.status_code == 400


async def test_dealers_can_browse_customers(client, customer, dealer):
    resp = await client.get("/api/customers/", headers=dealer["headers"])
    assert [c["email"] for c in resp.json()["data"]["customers"]] == ["asha@shop.io"]

    resp = await client.get(f"/api/customers/{customer['id']}", headers=dealer["headers"])
    assert resp.json()["data"]["name"] == "Asha Rao"

    assert (await client.get("/api/customers/42", headers=dealer["headers"])).status_code == 404
    assert (await client.get("/api/customers/", headers=customer["headers"])).status_code == 403


async def test_dealer_profile_update(client, dealer, other_dealer):
    resp = await client.put(
        "/api/admin/dealer/profile",
        json={"company_name": "Leaf Brothers", "phone": "022-555"},
        headers=dealer["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["company_name"] == "Leaf Brothers"

    resp = await client.put(
        "/api/admin/dealer/profile", json={"email": "Dealer.Two@shop.io"}, headers=dealer["headers"]
    )
    assert resp.status_code == 409

    resp = await client.put(
        "/api/admin/dealer/profile", json={"email": "Leaf@Shop.io"}, headers=dealer["headers"]
    )
    assert resp.json()["data"]["email"] == "leaf@shop.io"
