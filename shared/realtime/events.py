PRODUCT_ADDED = "productAdded"
PRODUCT_UPDATED = "productUpdated"
PRODUCT_DELETED = "productDeleted"
ORDER_UPDATED = "orderUpdated"
NEW_ORDER = "newOrder"

ALL_EVENTS = (PRODUCT_ADDED, PRODUCT_UPDATED, PRODUCT_DELETED, ORDER_UPDATED, NEW_ORDER)
