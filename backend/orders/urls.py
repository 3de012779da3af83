from django.urls import path, include
from rest_framework import routers
from .views import OrderViewSet, CustomerOrderViewSet, CustomerTableViewSet

app_name = "orders"

router = routers.DefaultRouter()
router.register(r"staff/orders", OrderViewSet, basename="staff-order")
router.register(r"customer/orders", CustomerOrderViewSet, basename="customer-order")
router.register(r"customer/tables", CustomerTableViewSet, basename="customer-table")

urlpatterns = [
    path("", include(router.urls)),
]
