"""
Orders API Integration Tests

Tests the complete request/response cycle for order endpoints including:
- Authentication on staff endpoints, anonymous access on customer endpoints
- Serializer validation
- The error envelope produced by the project exception handler
- Pagination of the staff listing
"""
import uuid
import pytest
from decimal import Decimal
from rest_framework import status

from orders.models import Order
from orders.services import OrderService, RequestedLine
from restaurants.models import Table

S = Order.OrderStatus

STAFF_ORDERS = '/api/staff/orders/'
CUSTOMER_ORDERS = '/api/customer/orders/'


def staff_payload(table, *lines, notes=''):
    return {
        'restaurant_id': str(table.restaurant_id),
        'table_id': str(table.id),
        'items': list(lines),
        'notes': notes,
    }


def line(menu_item, quantity=1, modifiers=()):
    return {
        'menu_item_id': str(menu_item.id),
        'quantity': quantity,
        'modifier_ids': [str(m.id) for m in modifiers],
    }


@pytest.mark.django_db
class TestStaffAuthentication:
    """Test that staff endpoints reject anonymous requests"""

    def test_list_requires_authentication(self, api_client, restaurant_a):
        response = api_client.get(STAFF_ORDERS, {'restaurant': str(restaurant_a.id)})

        assert response.status_code in [status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN]

    def test_create_requires_authentication(self, api_client, table_a, pizza):
        response = api_client.post(STAFF_ORDERS, staff_payload(table_a, line(pizza)), format='json')

        assert response.status_code in [status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN]
        assert Order.objects.count() == 0


@pytest.mark.django_db
class TestStaffOrderEndpoints:

    def test_create_order(self, staff_client, table_a, pizza, extra_cheese):
        """
        CRITICAL: Staff order creation returns the full priced order

        Business Impact: The terminal shows exactly what was persisted
        """
        response = staff_client.post(
            STAFF_ORDERS,
            staff_payload(table_a, line(pizza, 2, [extra_cheese]), notes='table by the window'),
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED, response.data
        data = response.data
        assert data['status'] == S.PENDING
        assert data['order_source'] == Order.OrderSource.STAFF
        assert Decimal(data['total_amount']) == Decimal('23.00')
        assert data['table'] == str(table_a.id)
        assert data['table_number'] == 1
        assert data['estimated_minutes'] == 20
        assert data['items'][0]['name'] == 'Margherita'
        assert data['items'][0]['modifiers'][0]['name'] == 'Extra cheese'
        assert Decimal(data['items'][0]['subtotal']) == Decimal('23.00')
        assert Table.objects.get(id=table_a.id).status == Table.TableStatus.OCCUPIED

    def test_create_rejects_malformed_payload(self, staff_client, table_a, pizza):
        payload = staff_payload(table_a, line(pizza, 0))

        response = staff_client.post(STAFF_ORDERS, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'items' in response.data

    def test_create_on_maintenance_table_conflicts(self, staff_client, maintenance_table_a, pizza):
        response = staff_client.post(STAFF_ORDERS, staff_payload(maintenance_table_a, line(pizza)), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {
            'error': {
                'code': 'TABLE_UNAVAILABLE',
                'kind': 'CONFLICT',
                'message': response.data['error']['message'],
            }
        }

    def test_create_with_foreign_item_not_found(self, staff_client, table_a, burger_b):
        response = staff_client.post(STAFF_ORDERS, staff_payload(table_a, line(burger_b)), format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'MENU_ITEM_UNAVAILABLE'
        assert response.data['error']['kind'] == 'NOT_FOUND'

    def test_create_duplicate_lines_rejected(self, staff_client, table_a, pizza):
        response = staff_client.post(
            STAFF_ORDERS, staff_payload(table_a, line(pizza), line(pizza)), format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'ORDER_VALIDATION_ERROR'
        assert response.data['error']['kind'] == 'VALIDATION'

    def test_list_paginated(self, staff_client, place_order, table_a, restaurant_a):
        for _ in range(3):
            place_order(table_a)

        response = staff_client.get(STAFF_ORDERS, {'restaurant': str(restaurant_a.id), 'limit': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        assert len(response.data['results']) == 2
        assert response.data['next'] is not None
        assert response.data['previous'] is None

    def test_list_filters_by_status_and_date(self, staff_client, place_order, order_service, table_a, restaurant_a):
        confirmed = place_order(table_a)
        place_order(table_a)
        order_service.update_status(confirmed.id, S.CONFIRMED)

        response = staff_client.get(STAFF_ORDERS, {
            'restaurant': str(restaurant_a.id),
            'status': S.CONFIRMED,
            'created_at__gte': '2025-01-01',
            'created_at__lte': '2025-01-01',
        })

        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data['results']] == [str(confirmed.id)]

    def test_list_requires_restaurant(self, staff_client):
        response = staff_client.get(STAFF_ORDERS)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'restaurant' in response.data

    def test_list_rejects_unknown_status(self, staff_client, restaurant_a):
        response = staff_client.get(STAFF_ORDERS, {'restaurant': str(restaurant_a.id), 'status': 'SERVED'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve(self, staff_client, place_order, table_a):
        order = place_order(table_a)

        response = staff_client.get(f'{STAFF_ORDERS}{order.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['order_number'] == order.order_number

    def test_retrieve_unknown(self, staff_client):
        response = staff_client.get(f'{STAFF_ORDERS}{uuid.uuid4()}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'ORDER_NOT_FOUND'

    def test_by_number(self, staff_client, place_order, table_a, restaurant_a):
        order = place_order(table_a)

        response = staff_client.get(
            f'{STAFF_ORDERS}by-number/{order.order_number}/', {'restaurant': str(restaurant_a.id)}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(order.id)

    def test_kitchen(self, staff_client, place_order, order_service, table_a, second_table_a, restaurant_a):
        active = place_order(table_a)
        cancelled = place_order(second_table_a)
        order_service.cancel_order(cancelled.id)

        response = staff_client.get(f'{STAFF_ORDERS}kitchen/', {'restaurant': str(restaurant_a.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data] == [str(active.id)]

    def test_statistics(self, staff_client, table_a, restaurant_a, pizza):
        # statistics are computed for the real current day
        OrderService().create_staff_order(
            restaurant_a.id, table_a.id, [RequestedLine(menu_item_id=pizza.id, quantity=2)]
        )

        response = staff_client.get(f'{STAFF_ORDERS}statistics/', {'restaurant': str(restaurant_a.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['today_orders'] == 1
        assert response.data['active_orders'] == 1
        assert Decimal(response.data['today_revenue']) == Decimal('20.00')
        assert response.data['by_status']['PENDING'] == 1


@pytest.mark.django_db
class TestStaffStatusEndpoints:

    def test_update_status(self, staff_client, place_order, table_a):
        order = place_order(table_a)

        response = staff_client.patch(
            f'{STAFF_ORDERS}{order.id}/status/',
            {'status': S.CONFIRMED, 'notes': 'seen', 'estimated_time': 25},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK, response.data
        assert response.data['status'] == S.CONFIRMED
        assert response.data['notes'] == 'seen'
        assert response.data['estimated_minutes'] == 25

    def test_invalid_transition_conflicts(self, staff_client, place_order, table_a):
        order = place_order(table_a)

        response = staff_client.patch(f'{STAFF_ORDERS}{order.id}/status/', {'status': S.COMPLETED}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error']['code'] == 'INVALID_STATUS_TRANSITION'
        assert Order.objects.get(id=order.id).status == S.PENDING

    @pytest.mark.parametrize('payload', [
        {'status': 'SERVED'},
        {'status': 'CONFIRMED', 'estimated_time': 0},
        {'status': 'CONFIRMED', 'estimated_time': 301},
        {},
    ])
    def test_status_payload_validation(self, staff_client, place_order, table_a, payload):
        order = place_order(table_a)

        response = staff_client.patch(f'{STAFF_ORDERS}{order.id}/status/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cancel_releases_table(self, staff_client, place_order, table_a):
        order = place_order(table_a)

        response = staff_client.post(
            f'{STAFF_ORDERS}{order.id}/cancel/', {'reason': 'walked out'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == S.CANCELLED
        assert response.data['cancelled_at'] is not None
        assert response.data['estimated_minutes'] is None
        assert Table.objects.get(id=table_a.id).status == Table.TableStatus.AVAILABLE

    def test_cancel_unknown_order(self, staff_client):
        response = staff_client.post(f'{STAFF_ORDERS}{uuid.uuid4()}/cancel/', {}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCustomerEndpoints:
    """Test anonymous self-service ordering and tracking"""

    def test_customer_creates_order_with_table_code(self, api_client, table_a, pizza):
        response = api_client.post(
            CUSTOMER_ORDERS,
            {'table_code': 'PZ-T1', 'items': [line(pizza, 2)]},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED, response.data
        assert set(response.data) == {'id', 'order_number', 'status', 'total_amount', 'estimated_time', 'table'}
        assert response.data['table'] == 1
        assert response.data['estimated_time'] == 20
        assert Order.objects.get(id=response.data['id']).order_source == Order.OrderSource.CUSTOMER

    def test_unknown_table_code(self, api_client, pizza):
        response = api_client.post(
            CUSTOMER_ORDERS, {'table_code': 'NOPE', 'items': [line(pizza)]}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'TABLE_NOT_FOUND'

    def test_empty_cart_rejected(self, api_client, table_a):
        response = api_client.post(CUSTOMER_ORDERS, {'table_code': 'PZ-T1', 'items': []}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_track_order(self, api_client, place_order, table_a):
        order = place_order(table_a)

        response = api_client.get(f'{CUSTOMER_ORDERS}{order.order_number}/', {'table_code': 'PZ-T1'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == S.PENDING
        assert 'notes' not in response.data

    def test_track_order_requires_table_code(self, api_client, place_order, table_a):
        order = place_order(table_a)

        response = api_client.get(f'{CUSTOMER_ORDERS}{order.order_number}/')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['kind'] == 'VALIDATION'

    def test_track_order_from_other_table(self, api_client, place_order, table_a, second_table_a):
        """
        CRITICAL: An order number alone does not reveal an order

        Security Impact: Tracking needs the code printed on the order's own table
        """
        order = place_order(table_a)

        response = api_client.get(f'{CUSTOMER_ORDERS}{order.order_number}/', {'table_code': 'PZ-T2'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_table_orders(self, api_client, place_order, table_a):
        order = place_order(table_a)

        response = api_client.get('/api/customer/tables/PZ-T1/orders/')

        assert response.status_code == status.HTTP_200_OK
        assert [o['order_number'] for o in response.data] == [order.order_number]

    def test_table_orders_unknown_code(self, api_client, db):
        response = api_client.get('/api/customer/tables/NOPE/orders/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'TABLE_NOT_FOUND'


@pytest.mark.django_db
class TestHealthCheck:

    def test_health(self, api_client):
        response = api_client.get('/api/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['status'] == 'ok'
