from .setup import setup_observability, configure_logging
from .metrics import (
    ecomm_orders_placed_total,
    ecomm_order_status_transitions_total,
    ecomm_bills_generated_total,
    ecomm_realtime_broadcasts_total,
    ecomm_side_effect_failures_total,
    ecomm_open_carts
)
