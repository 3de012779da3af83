"""
Typed errors raised by the order services.

Each error carries a stable ``code`` (safe to branch on in clients), the
``kind`` it belongs to, and the HTTP status the API layer answers with.
Messages are human-readable and never contain raw database error text.
"""
from rest_framework import status


class OrderError(Exception):
    """Base exception for order lifecycle errors."""

    code = "ORDER_ERROR"
    kind = "ERROR"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Order request failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {
            "error": {
                "code": self.code,
                "kind": self.kind,
                "message": self.message,
            }
        }


# --- NotFound ---

class OrderNotFoundError(OrderError):
    kind = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


class TableNotFound(OrderNotFoundError):
    """Raised when no table matches the given id or customer code."""

    code = "TABLE_NOT_FOUND"

    def __init__(self, table_ref, message=None):
        self.table_ref = table_ref
        super().__init__(message or f"Table '{table_ref}' not found")


class OrderNotFound(OrderNotFoundError):
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_ref, message=None):
        self.order_ref = order_ref
        super().__init__(message or f"Order '{order_ref}' not found")


class MenuItemUnavailable(OrderNotFoundError):
    """Raised when a requested menu item is missing, unavailable or owned by another restaurant."""

    code = "MENU_ITEM_UNAVAILABLE"

    def __init__(self, menu_item_id, message=None):
        self.menu_item_id = menu_item_id
        super().__init__(message or f"Menu item '{menu_item_id}' is not available")


class InvalidModifier(OrderNotFoundError):
    """Raised when a requested modifier cannot be applied to its line's menu item."""

    code = "INVALID_MODIFIER"

    def __init__(self, modifier_id, message=None):
        self.modifier_id = modifier_id
        super().__init__(message or f"Modifier '{modifier_id}' is not valid for this item")


# --- Conflict ---

class OrderConflictError(OrderError):
    kind = "CONFLICT"
    http_status = status.HTTP_409_CONFLICT


class TableUnavailable(OrderConflictError):
    code = "TABLE_UNAVAILABLE"

    def __init__(self, table, message=None):
        self.table = table
        super().__init__(message or f"Table {table.number} is not accepting orders ({table.status})")


class InvalidStatusTransition(OrderConflictError):
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current, requested, message=None):
        self.current = current
        self.requested = requested
        super().__init__(message or f"Cannot transition order from {current} to {requested}")


class OrderNumberAllocationFailed(OrderConflictError):
    """Raised when every order-number proposal collided with an existing order."""

    code = "ORDER_NUMBER_ALLOCATION_FAILED"

    def __init__(self, attempts, message=None):
        self.attempts = attempts
        super().__init__(
            message or f"Could not allocate a unique order number after {attempts} attempts"
        )


# --- Validation ---

class OrderValidationError(OrderError):
    """Raised when an order request is malformed (empty cart, bad quantity, unknown status)."""

    code = "ORDER_VALIDATION_ERROR"
    kind = "VALIDATION"
    http_status = status.HTTP_400_BAD_REQUEST


class InvalidOrderAmount(OrderValidationError):
    code = "INVALID_ORDER_AMOUNT"

    def __init__(self, amount, message=None):
        self.amount = amount
        super().__init__(message or f"Order total {amount} is outside the allowed range")
