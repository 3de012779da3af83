from .order_viewset import OrderViewSet
from .customer_viewset import CustomerOrderViewSet, CustomerTableViewSet

__all__ = [
    'OrderViewSet',
    'CustomerOrderViewSet',
    'CustomerTableViewSet',
]
