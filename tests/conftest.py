import os
import tempfile

# Settings are read at import time, so the environment must be ready first
_DB_FILE = os.path.join(tempfile.mkdtemp(prefix="storefront-tests-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_FILE}"
os.environ["OTEL_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import httpx  # noqa: E402
import pytest  # noqa: E402

from main import app  # noqa: E402
from shared.config.database import Base, engine  # noqa: E402
from shared.realtime import hub  # noqa: E402

PASSWORD = "secret123"

SHIPPING = {
    "name": "Asha Rao",
    "address": "12 Lake Road",
    "city": "Pune",
    "state": "Maharashtra",
    "zip_code": "411001",
    "phone": "9876543210",
}


@pytest.fixture(autouse=True)
async def reset_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await hub.drain()
    await engine.dispose()


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client, role: str, email: str, **extra) -> dict:
    resp = await client.post(
        "/api/auth/register", json={"email": email, "password": PASSWORD, "role": role, **extra}
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    return {"id": data["user_id"], "token": data["access_token"], "headers": bearer(data["access_token"])}


async def create_product(client, dealer: dict, name: str = "Green Tea", price: float = 100.0, **extra) -> dict:
    payload = {
        "name": name,
        "description": f"{name} description",
        "price": price,
        "category": "Beverages",
        "stock": 25,
        "image": "https://cdn.shop.io/img.png",
        **extra,
    }
    resp = await client.post("/api/products/", json=payload, headers=dealer["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def place_order(client, lines, headers=None) -> dict:
    payload = {
        "items": [{"product_id": pid, "quantity": qty} for pid, qty in lines],
        "shipping_address": SHIPPING,
    }
    resp = await client.post("/api/orders/", json=payload, headers=headers or {})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
async def customer(client):
    return await register(client, "customer", "asha@shop.io", name="Asha Rao")


@pytest.fixture
async def dealer(client):
    return await register(client, "dealer", "dealer.one@shop.io", company_name="Leaf & Co")


@pytest.fixture
async def other_dealer(client):
    return await register(client, "dealer", "dealer.two@shop.io", company_name="Spice Traders")
