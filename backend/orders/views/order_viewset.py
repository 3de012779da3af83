from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.request import Request
import logging

from core_backend.base import BaseAPIView
from orders.filters import OrderFilter, RestaurantScopeFilter
from orders.models import Order
from orders.serializers import OrderSerializer, StaffOrderCreateSerializer
from orders.services import OrderQueryService, OrderService

from .status_actions import StatusActionsMixin

logger = logging.getLogger(__name__)


class OrderViewSet(StatusActionsMixin, BaseAPIView):
    """
    Staff-facing order endpoints.

    - list / retrieve / by-number: read side via OrderQueryService
    - create: staff order for a table
    - status / cancel: status transitions (StatusActionsMixin)
    - kitchen / statistics: per-restaurant views
    """

    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    def get_queryset(self):
        return Order.objects.none()

    def get_order_service(self):
        return OrderService()

    def get_query_service(self):
        return OrderQueryService()

    def _restaurant_param(self, request):
        params = RestaurantScopeFilter(request.query_params, queryset=self.get_queryset()).cleaned_params()
        return params["restaurant"]

    def list(self, request: Request) -> Response:
        params = OrderFilter(request.query_params, queryset=self.get_queryset()).cleaned_params()
        limit, offset = self.get_page_params(request)

        orders, total = self.get_query_service().list_orders(
            params["restaurant"],
            status=params.get("status") or None,
            table_id=params.get("table"),
            date_from=params.get("created_at__gte"),
            date_to=params.get("created_at__lte"),
            limit=limit,
            offset=offset,
        )
        data = OrderSerializer(orders, many=True).data
        return self.paginated_response(request, data, total, limit, offset)

    def retrieve(self, request: Request, pk=None) -> Response:
        order = self.get_query_service().get_order(pk)
        return Response(OrderSerializer(order).data)

    def create(self, request: Request) -> Response:
        serializer = StaffOrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = self.get_order_service().create_staff_order(
            data["restaurant_id"],
            data["table_id"],
            serializer.get_lines(),
            notes=data["notes"],
            actor_id=request.user.pk,
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path=r"by-number/(?P<order_number>[^/]+)")
    def by_number(self, request: Request, order_number=None) -> Response:
        restaurant_id = self._restaurant_param(request)
        order = self.get_query_service().get_by_order_number(order_number, restaurant_id=restaurant_id)
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"])
    def kitchen(self, request: Request) -> Response:
        """Active orders for the kitchen display, oldest first."""
        restaurant_id = self._restaurant_param(request)
        orders = self.get_query_service().kitchen_orders(restaurant_id)
        return Response(OrderSerializer(orders, many=True).data)

    @action(detail=False, methods=["get"])
    def statistics(self, request: Request) -> Response:
        restaurant_id = self._restaurant_param(request)
        stats = self.get_query_service().statistics(restaurant_id)
        stats["today_revenue"] = str(stats["today_revenue"])
        return Response(stats)
