from .events import (
    ALL_EVENTS,
    NEW_ORDER,
    ORDER_UPDATED,
    PRODUCT_ADDED,
    PRODUCT_DELETED,
    PRODUCT_UPDATED,
)
from .hub import RealtimeHub, hub

__all__ = [
    "ALL_EVENTS",
    "NEW_ORDER",
    "ORDER_UPDATED",
    "PRODUCT_ADDED",
    "PRODUCT_DELETED",
    "PRODUCT_UPDATED",
    "RealtimeHub",
    "hub",
]
