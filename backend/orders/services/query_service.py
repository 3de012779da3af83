import logging
import math
from decimal import Decimal

from django.conf import settings
from django.db.models import Count, Prefetch, Sum
from django.utils import timezone

from orders.exceptions import OrderNotFound, TableNotFound
from orders.models import Order, OrderItem
from restaurants.models import Table

from .catalog_service import coerce_uuid
from .order_number_service import local_day_bounds
from .status_service import OCCUPYING_STATUSES

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class OrderQueryService:
    """Read side of the order lifecycle. Never writes."""

    def __init__(self, clock=None):
        self.clock = clock or timezone.now

    @staticmethod
    def base_queryset():
        return Order.objects.select_related("restaurant", "table").prefetch_related(
            Prefetch(
                "items",
                queryset=OrderItem.objects.select_related("menu_item").prefetch_related(
                    "modifiers__modifier"
                ),
            )
        )

    def get_order(self, order_id, restaurant_id=None) -> Order:
        order_uuid = coerce_uuid(order_id)
        if order_uuid is None:
            raise OrderNotFound(order_id)

        queryset = self.base_queryset().filter(id=order_uuid)
        if restaurant_id is not None:
            queryset = queryset.filter(restaurant_id=restaurant_id)

        order = queryset.first()
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def get_by_order_number(self, order_number, restaurant_id=None, table_code=None) -> Order:
        """
        Look up an order by its human-readable number. Numbers are unique per
        restaurant; without ``restaurant_id`` the newest match wins.
        """
        queryset = self.base_queryset().filter(order_number=order_number)
        if restaurant_id is not None:
            queryset = queryset.filter(restaurant_id=restaurant_id)
        if table_code is not None:
            queryset = queryset.filter(table__code=table_code)

        order = queryset.order_by("-created_at").first()
        if order is None:
            raise OrderNotFound(order_number)
        return order

    def list_orders(
        self,
        restaurant_id,
        status=None,
        table_id=None,
        date_from=None,
        date_to=None,
        limit=20,
        offset=0,
    ):
        """
        Return ``(orders, total_count)`` for one restaurant, newest first.
        ``limit`` is capped at 100.
        """
        queryset = Order.objects.filter(restaurant_id=restaurant_id)
        if status:
            queryset = queryset.filter(status=status)
        if table_id:
            queryset = queryset.filter(table_id=table_id)
        if date_from:
            queryset = queryset.filter(created_at__gte=date_from)
        if date_to:
            queryset = queryset.filter(created_at__lte=date_to)

        total_count = queryset.count()

        limit = max(1, min(int(limit or 20), MAX_PAGE_SIZE))
        offset = max(0, int(offset or 0))
        page_ids = list(
            queryset.order_by("-created_at", "order_number").values_list("id", flat=True)[offset:offset + limit]
        )
        orders = list(
            self.base_queryset().filter(id__in=page_ids).order_by("-created_at", "order_number")
        )
        return orders, total_count

    def kitchen_orders(self, restaurant_id):
        """Active orders for the kitchen display, oldest first."""
        return list(
            self.base_queryset()
            .filter(restaurant_id=restaurant_id, status__in=OCCUPYING_STATUSES)
            .order_by("created_at", "order_number")
        )

    def active_orders_count(self, restaurant_id) -> int:
        return Order.objects.filter(restaurant_id=restaurant_id, status__in=OCCUPYING_STATUSES).count()

    def table_orders(self, table_code):
        """Active orders on the table printed with ``table_code``, oldest first."""
        table = Table.objects.filter(code=table_code).first()
        if table is None:
            raise TableNotFound(table_code)

        return list(
            self.base_queryset()
            .filter(table=table, status__in=OCCUPYING_STATUSES)
            .order_by("created_at", "order_number")
        )

    def statistics(self, restaurant_id):
        start, end = local_day_bounds(self.clock())
        today = Order.objects.filter(
            restaurant_id=restaurant_id, created_at__gte=start, created_at__lt=end
        )

        by_status = {status: 0 for status in Order.OrderStatus.values}
        for row in today.values("status").annotate(count=Count("id")):
            by_status[row["status"]] = row["count"]

        revenue = (
            today.exclude(status=Order.OrderStatus.CANCELLED)
            .aggregate(total=Sum("total_amount"))["total"]
        )

        return {
            "today_orders": sum(by_status.values()),
            "active_orders": self.active_orders_count(restaurant_id),
            "today_revenue": revenue or Decimal("0.00"),
            "by_status": by_status,
        }

    @staticmethod
    def estimate_minutes(order):
        """
        Minutes until the order is expected to be ready.

        CANCELLED gives None and READY or later gives 0. Otherwise the staff
        override wins; without one the estimate is the longest preparation time
        among the order's items, halved (rounded up) once the kitchen has
        started.
        """
        status = order.status
        if status == Order.OrderStatus.CANCELLED:
            return None
        if status not in (
            Order.OrderStatus.PENDING,
            Order.OrderStatus.CONFIRMED,
            Order.OrderStatus.PREPARING,
        ):
            return 0
        if order.estimated_time is not None:
            return order.estimated_time

        default_minutes = getattr(settings, "ORDER_DEFAULT_PREPARATION_MINUTES", 15)
        base = max(
            (item.menu_item.preparation_time for item in order.items.all() if item.menu_item.preparation_time),
            default=default_minutes,
        )
        if status == Order.OrderStatus.PREPARING:
            return math.ceil(base / 2)
        return base
