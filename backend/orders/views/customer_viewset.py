from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.request import Request
import logging

from core_backend.base import BaseAPIView
from orders.exceptions import OrderValidationError
from orders.models import Order
from orders.serializers import CustomerOrderCreateSerializer, CustomerOrderSerializer
from orders.services import OrderQueryService, OrderService

logger = logging.getLogger(__name__)


class CustomerOrderViewSet(BaseAPIView):
    """
    Anonymous self-service ordering from the table QR card.

    Customers identify themselves only by the table code; tracking an order
    requires both its number and the code of the table it was placed on.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    lookup_field = "order_number"
    lookup_value_regex = "[^/]+"

    def get_queryset(self):
        return Order.objects.none()

    def get_order_service(self):
        return OrderService()

    def create(self, request: Request) -> Response:
        serializer = CustomerOrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = self.get_order_service().create_customer_order(
            data["table_code"],
            serializer.get_lines(),
            notes=data["notes"],
        )
        return Response(CustomerOrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, order_number=None) -> Response:
        table_code = request.query_params.get("table_code")
        if not table_code:
            raise OrderValidationError("table_code is required to track an order")

        order = OrderQueryService().get_by_order_number(order_number, table_code=table_code)
        return Response(CustomerOrderSerializer(order).data)


class CustomerTableViewSet(BaseAPIView):
    """Read-only table views for customers, addressed by table code."""

    permission_classes = [AllowAny]
    authentication_classes = []
    lookup_field = "table_code"
    lookup_value_regex = "[^/]+"

    def get_queryset(self):
        return Order.objects.none()

    @action(detail=True, methods=["get"])
    def orders(self, request: Request, table_code=None) -> Response:
        """Active orders on the table, oldest first."""
        orders = OrderQueryService().table_orders(table_code)
        return Response(CustomerOrderSerializer(orders, many=True).data)
