import pytest

from shared.errors import InvalidTransitionError, ValidationError
from services.order_service.status import (
    CANCELLED,
    CONFIRMED,
    DELIVERED,
    PENDING,
    PROCESSING,
    SHIPPED,
    allowed_sources,
    can_transition,
    check_transition,
    is_billable,
    validate_status,
)


@pytest.mark.parametrize(
    "current,target",
    [
        (PENDING, CONFIRMED),
        (CONFIRMED, PROCESSING),
        (PROCESSING, SHIPPED),
        (SHIPPED, DELIVERED),
        (PENDING, CANCELLED),
        (SHIPPED, CANCELLED),
    ],
)
def test_forward_steps_and_cancel_are_allowed(current, target):
    assert can_transition(current, target)
    assert check_transition(current, target) is True


@pytest.mark.parametrize(
    "current,target",
    [
        (PENDING, SHIPPED),
        (CONFIRMED, PENDING),
        (DELIVERED, CANCELLED),
        (CANCELLED, PENDING),
        (DELIVERED, SHIPPED),
    ],
)
def test_illegal_moves_raise_conflict(current, target):
    with pytest.raises(InvalidTransitionError) as excinfo:
        check_transition(current, target)
    assert excinfo.value.status_code == 409


def test_same_status_is_a_noop():
    assert check_transition(SHIPPED, SHIPPED) is False
    assert check_transition(DELIVERED, DELIVERED) is False


@pytest.mark.parametrize("value", [None, "", "refunded", "PENDING"])
def test_unknown_status_is_rejected(value):
    with pytest.raises(ValidationError):
        validate_status(value)


def test_allowed_sources():
    assert allowed_sources(CONFIRMED) == {PENDING}
    assert allowed_sources(CANCELLED) == {PENDING, CONFIRMED, PROCESSING, SHIPPED}
    assert allowed_sources(PENDING) == set()


def test_billable_states():
    assert is_billable(CONFIRMED)
    assert is_billable(DELIVERED)
    assert not is_billable(SHIPPED)
