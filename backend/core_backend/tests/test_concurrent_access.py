"""
Concurrent Access Tests

Tests for race conditions between staff terminals and customers ordering on
the same table at the same moment:
- Order numbers must stay unique under simultaneous creation
- Table occupancy must match the set of active orders

These tests use threading to simulate real-world concurrent access patterns.
Row locks need a real database server, so they only run on PostgreSQL.
The same uniqueness property is checked on every database by
orders/tests/test_order_numbers.py with simulated simultaneous proposals.
"""
import pytest
from threading import Barrier, Thread
from django.db import connection

from orders.models import Order
from orders.services import NullEventSink, OrderService, RequestedLine
from restaurants.models import Table

pytestmark = pytest.mark.skipif(
    connection.vendor != 'postgresql',
    reason='select_for_update and concurrent transactions need PostgreSQL',
)


def run_concurrently(targets):
    """Start every target behind a barrier and wait for all of them."""
    barrier = Barrier(len(targets))
    results, errors = [], []

    def wrap(fn):
        def runner():
            try:
                barrier.wait()
                results.append(fn())
            except Exception as e:
                errors.append(e)
            finally:
                connection.close()
        return runner

    threads = [Thread(target=wrap(fn)) for fn in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results, errors


@pytest.mark.django_db(transaction=True)
class TestConcurrentOrderCreation:
    """Test simultaneous order creation on one restaurant"""

    def test_concurrent_orders_get_distinct_numbers(self, restaurant_a, table_a, second_table_a, pizza):
        """
        CRITICAL: Verify that simultaneous orders never share an order number

        Scenario:
        - 4 requests create orders at the same time, on two tables
        - Expected: 4 orders, 4 distinct numbers, no error surfaced
        """
        service = OrderService(event_sink=NullEventSink())
        lines = [RequestedLine(menu_item_id=pizza.id, quantity=1)]

        def staff_order(table):
            return lambda: service.create_staff_order(restaurant_a.id, table.id, lines).order_number

        def customer_order(code):
            return lambda: service.create_customer_order(code, lines).order_number

        results, errors = run_concurrently([
            staff_order(table_a),
            staff_order(second_table_a),
            customer_order('PZ-T1'),
            customer_order('PZ-T2'),
        ])

        assert errors == [], f"Unexpected errors: {errors}"
        assert len(set(results)) == 4, f"Duplicate order numbers: {results}"
        assert Order.objects.filter(restaurant=restaurant_a).count() == 4

    def test_concurrent_completion_releases_table_once(self, restaurant_a, table_a, pizza):
        """
        CRITICAL: Two orders on one table finishing at the same time free the table

        Scenario:
        - Two active orders on the same table
        - Both are completed/cancelled simultaneously
        - Expected: the table ends AVAILABLE, never stuck OCCUPIED
        """
        service = OrderService(event_sink=NullEventSink())
        lines = [RequestedLine(menu_item_id=pizza.id, quantity=1)]
        first = service.create_staff_order(restaurant_a.id, table_a.id, lines)
        second = service.create_staff_order(restaurant_a.id, table_a.id, lines)

        results, errors = run_concurrently([
            lambda: service.cancel_order(first.id).status,
            lambda: service.cancel_order(second.id).status,
        ])

        assert errors == []
        assert results == [Order.OrderStatus.CANCELLED] * 2
        table_a.refresh_from_db()
        assert table_a.status == Table.TableStatus.AVAILABLE
