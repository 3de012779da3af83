from rest_framework import serializers
from orders.models import OrderItem, OrderItemModifier
from core_backend.base import BaseModelSerializer


class OrderItemModifierSerializer(BaseModelSerializer):
    modifier = serializers.UUIDField(source="modifier_id", read_only=True)
    name = serializers.CharField(source="modifier.name", read_only=True)

    class Meta:
        model = OrderItemModifier
        fields = ["modifier", "name", "price"]
        read_only = True


class OrderItemSerializer(BaseModelSerializer):
    menu_item = serializers.UUIDField(source="menu_item_id", read_only=True)
    name = serializers.CharField(source="menu_item.name", read_only=True)
    modifiers = OrderItemModifierSerializer(many=True, read_only=True)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "menu_item",
            "name",
            "price",
            "quantity",
            "notes",
            "unit_price",
            "subtotal",
            "modifiers",
        ]
        read_only = True
