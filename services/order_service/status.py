"""
Order status state machine.

    pending -> confirmed -> processing -> shipped -> delivered
    any non-terminal state -> cancelled

Re-applying the current status is accepted as a no-op.
"""
from shared.errors import InvalidTransitionError, ValidationError

PENDING = "pending"
CONFIRMED = "confirmed"
PROCESSING = "processing"
SHIPPED = "shipped"
DELIVERED = "delivered"
CANCELLED = "cancelled"

LIFECYCLE = (PENDING, CONFIRMED, PROCESSING, SHIPPED, DELIVERED)
ALL_STATUSES = LIFECYCLE + (CANCELLED,)
TERMINAL = frozenset({DELIVERED, CANCELLED})
BILLABLE = frozenset({CONFIRMED, DELIVERED})

TRANSITIONS: dict[str, frozenset[str]] = {
    PENDING: frozenset({CONFIRMED, CANCELLED}),
    CONFIRMED: frozenset({PROCESSING, CANCELLED}),
    PROCESSING: frozenset({SHIPPED, CANCELLED}),
    SHIPPED: frozenset({DELIVERED, CANCELLED}),
    DELIVERED: frozenset(),
    CANCELLED: frozenset(),
}


def validate_status(value: str | None) -> str:
    if not value or value not in ALL_STATUSES:
        raise ValidationError("Valid status is required")
    return value


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def check_transition(current: str, target: str) -> bool:
    """True when the order must change, False for a same-status no-op."""
    if current == target:
        return False
    if not can_transition(current, target):
        raise InvalidTransitionError(current, target)
    return True


def allowed_sources(target: str) -> frozenset[str]:
    """States from which `target` may be entered."""
    return frozenset(state for state, targets in TRANSITIONS.items() if target in targets)


def is_billable(status: str) -> bool:
    return status in BILLABLE
