"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like restaurants, tables, menu items, modifiers and staff users.
"""
import pytest
from datetime import datetime
from decimal import Decimal
from django.utils import timezone

from restaurants.models import Restaurant, Table
from menu.models import MenuItem, ModifierGroup, Modifier, MenuItemModifierGroup
from orders.services import OrderService, RecordingEventSink, RequestedLine


# ============================================================================
# RESTAURANT FIXTURES
# ============================================================================

@pytest.fixture
def restaurant_a(db):
    """Create test restaurant A (Pizza Place)"""
    return Restaurant.objects.create(name='Pizza Place', slug='pizza-place')


@pytest.fixture
def restaurant_b(db):
    """Create test restaurant B (Burger Joint)"""
    return Restaurant.objects.create(name='Burger Joint', slug='burger-joint')


# ============================================================================
# TABLE FIXTURES
# ============================================================================

@pytest.fixture
def table_a(restaurant_a):
    """AVAILABLE table 1 in restaurant A"""
    return Table.objects.create(restaurant=restaurant_a, number=1, code='PZ-T1', capacity=4)


@pytest.fixture
def second_table_a(restaurant_a):
    return Table.objects.create(restaurant=restaurant_a, number=2, code='PZ-T2', capacity=2)


@pytest.fixture
def maintenance_table_a(restaurant_a):
    return Table.objects.create(
        restaurant=restaurant_a, number=9, code='PZ-T9',
        status=Table.TableStatus.MAINTENANCE,
    )


@pytest.fixture
def reserved_table_a(restaurant_a):
    return Table.objects.create(
        restaurant=restaurant_a, number=8, code='PZ-T8',
        status=Table.TableStatus.RESERVED,
    )


@pytest.fixture
def table_b(restaurant_b):
    return Table.objects.create(restaurant=restaurant_b, number=1, code='BJ-T1', capacity=4)


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def pizza(restaurant_a):
    """Margherita at 10.00, 20 minutes"""
    return MenuItem.objects.create(
        restaurant=restaurant_a, name='Margherita', price=Decimal('10.00'), preparation_time=20
    )


@pytest.fixture
def salad(restaurant_a):
    """Side salad at 4.25, 8 minutes"""
    return MenuItem.objects.create(
        restaurant=restaurant_a, name='Side Salad', price=Decimal('4.25'), preparation_time=8
    )


@pytest.fixture
def unavailable_item(restaurant_a):
    return MenuItem.objects.create(
        restaurant=restaurant_a, name='Truffle Special', price=Decimal('24.00'), is_available=False
    )


@pytest.fixture
def burger_b(restaurant_b):
    """Menu item owned by restaurant B"""
    return MenuItem.objects.create(restaurant=restaurant_b, name='Classic Burger', price=Decimal('9.50'))


@pytest.fixture
def toppings_group(restaurant_a, pizza):
    """Toppings group offered on the pizza"""
    group = ModifierGroup.objects.create(restaurant=restaurant_a, name='Extra toppings', max_select=3)
    MenuItemModifierGroup.objects.create(menu_item=pizza, group=group)
    return group


@pytest.fixture
def extra_cheese(restaurant_a, toppings_group):
    """Extra cheese at 1.50"""
    return Modifier.objects.create(
        restaurant=restaurant_a, group=toppings_group, name='Extra cheese', price=Decimal('1.50')
    )


@pytest.fixture
def olives(restaurant_a, toppings_group):
    return Modifier.objects.create(
        restaurant=restaurant_a, group=toppings_group, name='Olives', price=Decimal('0.75')
    )


@pytest.fixture
def dressing_modifier(restaurant_a, salad):
    """Modifier whose group is attached to the salad only"""
    group = ModifierGroup.objects.create(restaurant=restaurant_a, name='Dressing')
    MenuItemModifierGroup.objects.create(menu_item=salad, group=group)
    return Modifier.objects.create(
        restaurant=restaurant_a, group=group, name='Balsamic', price=Decimal('0.50')
    )


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def staff_user(db):
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(
        username='waiter', password='password123', is_staff=True
    )


# ============================================================================
# SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def fixed_clock():
    """Clock pinned to 2025-01-01 12:00 local time"""
    moment = timezone.make_aware(datetime(2025, 1, 1, 12, 0))
    return lambda: moment


@pytest.fixture
def recording_sink():
    return RecordingEventSink()


@pytest.fixture
def order_service(recording_sink, fixed_clock):
    """OrderService wired with a recording sink and a fixed clock"""
    return OrderService(event_sink=recording_sink, clock=fixed_clock)


@pytest.fixture
def place_order(order_service, pizza):
    """
    Factory that creates a staff order of one pizza on ``table``.

    Usage:
        order = place_order(table_a)
        order = place_order(table_a, quantity=3)
    """
    def _place(table, quantity=1, menu_item=None):
        return order_service.create_staff_order(
            table.restaurant_id,
            table.id,
            [RequestedLine(menu_item_id=(menu_item or pizza).id, quantity=quantity)],
        )
    return _place
