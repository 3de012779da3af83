"""
URL configuration for core_backend project.

Staff endpoints live under ``/api/staff/``, customer self-service endpoints
under ``/api/customer/``. Both are provided by the orders app.
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/", include("orders.urls")),
]
