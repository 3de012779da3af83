from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.request import Request
import logging

from orders.serializers import (
    CancelOrderSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)

logger = logging.getLogger(__name__)


class StatusActionsMixin:
    """
    Mixin for order status transition actions

    This mixin provides action methods for OrderViewSet. Transition rules and
    table release live in ``OrderService``; domain errors are rendered by the
    project exception handler.
    """

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk=None) -> Response:
        """Moves the order to a new status, optionally appending notes."""
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = self.get_order_service().update_status(
            pk,
            data["status"],
            notes=data.get("notes"),
            estimated_time=data.get("estimated_time"),
            actor_id=request.user.pk,
        )
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request: Request, pk=None) -> Response:
        """Cancels the order; the reason is appended to its notes."""
        serializer = CancelOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self.get_order_service().cancel_order(
            pk,
            reason=serializer.validated_data.get("reason"),
            actor_id=request.user.pk,
        )
        logger.info(f"Order {order.order_number} cancelled by user {request.user.pk}")
        return Response(OrderSerializer(order).data)
