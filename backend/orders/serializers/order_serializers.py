from rest_framework import serializers
from orders.models import Order
from orders.services.catalog_service import RequestedLine
from orders.services.query_service import OrderQueryService
from core_backend.base import BaseModelSerializer

from .order_item_serializers import OrderItemSerializer


class OrderSerializer(BaseModelSerializer):
    """
    Full order representation for staff endpoints and realtime events.
    Every value is JSON-safe (UUIDs and amounts render as strings).
    """

    restaurant = serializers.UUIDField(source="restaurant_id", read_only=True)
    table = serializers.UUIDField(source="table_id", read_only=True)
    table_number = serializers.IntegerField(source="table.number", read_only=True)
    estimated_minutes = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "restaurant",
            "table",
            "table_number",
            "status",
            "payment_status",
            "order_source",
            "total_amount",
            "notes",
            "estimated_time",
            "estimated_minutes",
            "created_at",
            "updated_at",
            "completed_at",
            "cancelled_at",
            "items",
        ]
        read_only = True

    def get_estimated_minutes(self, obj):
        return OrderQueryService.estimate_minutes(obj)


class CustomerOrderSerializer(BaseModelSerializer):
    """The subset of an order shown to customers at the table."""

    estimated_time = serializers.SerializerMethodField()
    table = serializers.IntegerField(source="table.number", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "order_number", "status", "total_amount", "estimated_time", "table"]
        read_only = True

    def get_estimated_time(self, obj):
        return OrderQueryService.estimate_minutes(obj)


# --- Input serializers ---

class OrderLineInputSerializer(serializers.Serializer):
    menu_item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    modifier_ids = serializers.ListField(
        child=serializers.UUIDField(), required=False, default=list
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)


class BaseOrderCreateSerializer(serializers.Serializer):
    items = OrderLineInputSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)

    def get_lines(self):
        return [
            RequestedLine(
                menu_item_id=line["menu_item_id"],
                quantity=line["quantity"],
                modifier_ids=tuple(line["modifier_ids"]),
                notes=line["notes"],
            )
            for line in self.validated_data["items"]
        ]


class StaffOrderCreateSerializer(BaseOrderCreateSerializer):
    restaurant_id = serializers.UUIDField()
    table_id = serializers.UUIDField()


class CustomerOrderCreateSerializer(BaseOrderCreateSerializer):
    table_code = serializers.CharField(max_length=32)
