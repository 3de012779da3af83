import django_filters
from core_backend.base.filters import BaseFilterSet
from .models import Order


class OrderFilter(BaseFilterSet):
    """
    Query parameters accepted by the staff order listing.

    ``restaurant`` is required; date bounds accept either a date or a full
    datetime.
    """

    restaurant = django_filters.UUIDFilter(field_name='restaurant_id', required=True)
    status = django_filters.ChoiceFilter(choices=Order.OrderStatus.choices)
    table = django_filters.UUIDFilter(field_name='table_id')
    created_at__gte = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_at__lte = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='lte')

    end_of_day_filters = ('created_at__lte',)

    class Meta:
        model = Order
        fields = ['restaurant', 'status', 'table', 'created_at__gte', 'created_at__lte']


class RestaurantScopeFilter(BaseFilterSet):
    """Single required ``restaurant`` parameter for kitchen and statistics views."""

    restaurant = django_filters.UUIDFilter(field_name='restaurant_id', required=True)

    class Meta:
        model = Order
        fields = ['restaurant']
