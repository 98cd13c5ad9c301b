from typing import Any, Optional, Sequence

import httpx
import structlog

logger = structlog.get_logger(__name__)


class DealerApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DealerApiClient:
    """Async client for the dealer-facing endpoints. Returns the `data` part of each envelope."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "DealerApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        resp = await self._client.request(method, path, headers=headers, **kwargs)

        body = resp.json() if resp.content else {}
        if resp.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise DealerApiError(resp.status_code, message or resp.reason_phrase)
        return body.get("data") if isinstance(body, dict) else body

    async def login(self, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password, "role": "dealer"}
        )
        self.token = data["access_token"]
        return data

    async def list_orders(self, status: Optional[str] = None, limit: int = 50, skip: int = 0) -> dict:
        params = {"limit": limit, "skip": skip}
        if status:
            params["status"] = status
        return await self._request("GET", "/api/admin/dealer/orders", params=params)

    async def list_all_orders(self, status: Optional[str] = None, page_size: int = 50) -> list[dict]:
        orders, skip = [], 0
        while True:
            page = await self.list_orders(status=status, limit=page_size, skip=skip)
            orders.extend(page["orders"])
            skip += len(page["orders"])
            if not page["orders"] or skip >= page["total"]:
                return orders

    async def get_order(self, order_id: int) -> Optional[dict]:
        """None when the order is gone or no longer visible to this dealer."""
        try:
            return await self._request("GET", f"/api/admin/dealer/orders/{order_id}")
        except DealerApiError as exc:
            if exc.status_code in (403, 404):
                return None
            raise

    async def update_status(self, order_id: int, status: str) -> dict:
        return await self._request("PUT", f"/api/admin/dealer/orders/{order_id}/status", json={"status": status})

    async def bulk_status(self, order_ids: Sequence[int], status: str) -> dict:
        return await self._request(
            "POST", "/api/admin/dealer/orders/bulk-status", json={"order_ids": list(order_ids), "status": status}
        )

    async def list_products(self) -> list[dict]:
        data = await self._request("GET", "/api/admin/dealer/products")
        return data["products"]
