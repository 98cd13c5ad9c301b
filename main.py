import structlog
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from shared.config.database import create_tables
from shared.config.settings import CORS_ORIGINS, SERVICE_NAME
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.realtime import hub

from services.auth_service.main import auth_app
from services.product_service.main import product_app
from services.order_service.main import order_app
from services.cart_service.main import cart_app
from services.bill_service.main import bill_app
from services.customer_service.main import customer_app
from services.dealer_service.main import dealer_app
from services.feedback_service.main import feedback_app

logger = structlog.get_logger(__name__)

app = FastAPI(title="Storefront Cluster")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_observability(app, SERVICE_NAME)
register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    await create_tables()
    logger.info("tables_ready")


@app.on_event("shutdown")
async def shutdown_event():
    await hub.drain()


@app.get("/api/health")
async def health():
    return {"status": "ok", "realtime_clients": hub.connection_count}


@app.websocket("/ws")
async def realtime(websocket: WebSocket):
    await hub.connect(websocket)
    try:
        while True:
            # Inbound frames are ignored; the socket is push-only
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)


app.mount("/api/auth", auth_app)
app.mount("/api/products", product_app)
app.mount("/api/orders", order_app)
app.mount("/api/cart", cart_app)
app.mount("/api/bills", bill_app)
app.mount("/api/customers", customer_app)
app.mount("/api/admin/dealer", dealer_app)
app.mount("/api/feedback", feedback_app)
