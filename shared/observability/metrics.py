from prometheus_client import Counter, Gauge

# Business Metrics
ecomm_orders_placed_total = Counter(
    "ecomm_orders_placed_total",
    "Total orders placed through checkout",
    ["channel"]  # Labels: 'customer', 'guest'
)

ecomm_order_status_transitions_total = Counter(
    "ecomm_order_status_transitions_total",
    "Order status transitions applied by dealers",
    ["status"]
)

ecomm_bills_generated_total = Counter(
    "ecomm_bills_generated_total",
    "Bills created for confirmed or delivered orders"
)

ecomm_realtime_broadcasts_total = Counter(
    "ecomm_realtime_broadcasts_total",
    "Real-time events broadcast to connected clients",
    ["event"]
)

ecomm_side_effect_failures_total = Counter(
    "ecomm_side_effect_failures_total",
    "Non-critical side effects that failed and were swallowed",
    ["effect"]  # Labels: 'generate_bill', 'clear_cart', 'sync_pending_order', ...
)

ecomm_open_carts = Gauge(
    "ecomm_open_carts",
    "Number of carts mirrored into an open pending order"
)
