"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import logging
import pytest


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def null_event_sink(settings):
    """
    Route order events to NullEventSink unless a test injects its own sink.

    Services built by the API views resolve their sink from settings, so this
    keeps API tests independent of the channel layer.
    """
    settings.ORDER_EVENT_SINK = "orders.services.notification_service.NullEventSink"


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_customer_endpoint(api_client):
            response = api_client.post('/api/customer/orders/', {...}, format='json')
            assert response.status_code == 201
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def staff_client(api_client, staff_user):
    """
    Provide an API client authenticated as a staff user.

    Usage:
        def test_protected_endpoint(staff_client):
            response = staff_client.get('/api/staff/orders/', {'restaurant': ...})
            assert response.status_code == 200
    """
    api_client.force_authenticate(user=staff_user)
    return api_client


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture
def order_logs(caplog, monkeypatch):
    """
    Capture records from the `orders` loggers.

    LOGGING stops them from propagating to the root logger, where caplog listens.
    """
    for name in ("orders", "orders.audit"):
        monkeypatch.setattr(logging.getLogger(name), "propagate", True)
    caplog.set_level(logging.INFO)
    return caplog


# Import all fixtures from fixtures module
from core_backend.tests.fixtures import *
