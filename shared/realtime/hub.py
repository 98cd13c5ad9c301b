"""
Fan-out of product and order mutations to every connected WebSocket.

There is no per-client filtering and no delivery guarantee: sockets that
are connected when the broadcast runs receive the message, everyone else
reconciles by reloading after reconnect.
"""
import asyncio
from typing import Any

import structlog
from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

from shared.observability.metrics import ecomm_realtime_broadcasts_total

logger = structlog.get_logger(__name__)


class RealtimeHub:
    def __init__(self):
        self._connections: set[WebSocket] = set()
        self._pending: set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.info("realtime_client_connected", clients=len(self._connections))

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.info("realtime_client_disconnected", clients=len(self._connections))

    def publish(self, event: str, payload: Any) -> None:
        """
        Schedule a broadcast and return immediately. Call only after the
        mutation is committed; the HTTP response never waits on delivery.
        """
        message = {"event": event, "data": jsonable_encoder(payload)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("realtime_publish_without_loop", realtime_event=event)
            return
        task = loop.create_task(self.broadcast(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def broadcast(self, message: dict) -> int:
        """Send to every socket; a failing socket is dropped. Returns deliveries."""
        delivered = 0
        for websocket in list(self._connections):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as exc:
                logger.warning("realtime_send_failed", realtime_event=message.get("event"), error=str(exc))
                self.disconnect(websocket)
        ecomm_realtime_broadcasts_total.labels(event=message.get("event", "unknown")).inc()
        return delivered

    async def drain(self) -> None:
        """Wait for scheduled broadcasts. Used on shutdown and in tests."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


hub = RealtimeHub()
