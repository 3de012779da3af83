"""
Orders serializers package - modular serializer layer.
"""

# Order item serializers
from .order_item_serializers import (
    OrderItemModifierSerializer,
    OrderItemSerializer,
)

# Order serializers
from .order_serializers import (
    OrderSerializer,
    CustomerOrderSerializer,
    OrderLineInputSerializer,
    StaffOrderCreateSerializer,
    CustomerOrderCreateSerializer,
)

# Status serializers
from .status_serializers import UpdateOrderStatusSerializer, CancelOrderSerializer

__all__ = [
    # Order items
    'OrderItemModifierSerializer',
    'OrderItemSerializer',
    # Orders
    'OrderSerializer',
    'CustomerOrderSerializer',
    'OrderLineInputSerializer',
    'StaffOrderCreateSerializer',
    'CustomerOrderCreateSerializer',
    # Status
    'UpdateOrderStatusSerializer',
    'CancelOrderSerializer',
]
