import logging

from orders.exceptions import InvalidStatusTransition, OrderValidationError
from orders.models import Order

logger = logging.getLogger(__name__)

OrderStatus = Order.OrderStatus

# Orders in these statuses keep their table OCCUPIED. DELIVERED is left out,
# but entering it does not release the table: release only runs on
# COMPLETED or CANCELLED, so a table whose last order is DELIVERED stays
# OCCUPIED until that order completes.
OCCUPYING_STATUSES = frozenset({
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
})

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

# Statuses an order may be cancelled from. READY is included: the kitchen can
# still cancel a plate that has not left the pass. DELIVERED is not.
CANCELLABLE_STATUSES = frozenset({
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
})

# Forward workflow; cancellation edges are added from CANCELLABLE_STATUSES below.
FORWARD_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING},
    OrderStatus.PREPARING: {OrderStatus.READY},
    OrderStatus.READY: {OrderStatus.DELIVERED, OrderStatus.COMPLETED},
    OrderStatus.DELIVERED: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

VALID_STATUS_TRANSITIONS = {
    status: frozenset(
        targets | ({OrderStatus.CANCELLED} if status in CANCELLABLE_STATUSES else set())
    )
    for status, targets in FORWARD_TRANSITIONS.items()
}


class StatusTransitionValidator:
    """Finite state machine for order status changes. Pure: never touches the database."""

    @staticmethod
    def coerce_status(value) -> str:
        """Return ``value`` as an ``OrderStatus``; unknown values are a validation error."""
        if value not in OrderStatus.values:
            raise OrderValidationError(f"'{value}' is not a valid order status.")
        return OrderStatus(value)

    @staticmethod
    def can_transition(current, requested) -> bool:
        current = StatusTransitionValidator.coerce_status(current)
        requested = StatusTransitionValidator.coerce_status(requested)
        return requested in VALID_STATUS_TRANSITIONS[current]

    @staticmethod
    def validate_transition(current, requested) -> str:
        """
        Raise ``InvalidStatusTransition`` unless ``current -> requested`` is allowed.
        Returns the requested status.
        """
        if not StatusTransitionValidator.can_transition(current, requested):
            logger.info(f"Rejected status transition {current} -> {requested}")
            raise InvalidStatusTransition(current, requested)
        return OrderStatus(requested)

    @staticmethod
    def requires_occupancy_check(requested) -> bool:
        """True when moving into ``requested`` may free the order's table."""
        return requested in TERMINAL_STATUSES

    @staticmethod
    def is_occupying(status) -> bool:
        return status in OCCUPYING_STATUSES
