from rest_framework import serializers
from orders.models import Order


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Validates a staff status change. Whether the transition is allowed is
    decided by the status service, not here.
    """

    status = serializers.ChoiceField(choices=Order.OrderStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000)
    estimated_time = serializers.IntegerField(
        required=False, min_value=1, max_value=300,
        help_text="Estimated minutes until ready (1 to 300)",
    )


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=1000)
