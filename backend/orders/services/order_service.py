from decimal import Decimal
from django.conf import settings
from django.db import transaction
from django.utils import timezone
import logging

from orders.audit import OrderAuditLogger
from orders.exceptions import InvalidOrderAmount, TableUnavailable
from orders.models import Order

from .catalog_service import CatalogResolver
from .notification_service import ORDER_NEW, ORDER_STATUS, build_order_event, get_default_event_sink
from .order_number_service import OrderNumberAllocator
from .query_service import OrderQueryService
from .status_service import StatusTransitionValidator
from .unit_of_work import OrderUnitOfWork, retry_on_duplicate

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = "\n---\n"


class OrderService:
    """
    Transaction coordinator for order creation and status changes.

    Every public method is one unit of work: table and order rows are locked
    with ``select_for_update`` and all writes commit together. Events are
    published to the injected sink only after the commit.

    Usage:
        service = OrderService(event_sink=NullEventSink())
        order = service.create_staff_order(restaurant.id, table.id, [RequestedLine(item.id, 2)])
    """

    def __init__(
        self,
        event_sink=None,
        clock=None,
        allocator=None,
        resolver=None,
        unit_of_work=None,
        max_attempts=None,
    ):
        self.clock = clock or timezone.now
        self.event_sink = event_sink if event_sink is not None else get_default_event_sink()
        self.allocator = allocator or OrderNumberAllocator(clock=self.clock)
        self.resolver = resolver or CatalogResolver()
        self.uow = unit_of_work or OrderUnitOfWork()
        self.max_attempts = max_attempts or getattr(settings, "ORDER_NUMBER_MAX_ATTEMPTS", 3)
        self.queries = OrderQueryService(clock=self.clock)

    # --- Creation ---

    def create_staff_order(self, restaurant_id, table_id, lines, notes="", actor_id=None) -> Order:
        """
        Create an order from a staff terminal for ``table_id`` in ``restaurant_id``.

        Raises:
            TableNotFound, TableUnavailable, MenuItemUnavailable, InvalidModifier,
            OrderValidationError, InvalidOrderAmount, OrderNumberAllocationFailed
        """
        with transaction.atomic():
            table = self.uow.lock_table_by_id(restaurant_id, table_id)
            order = self._create_order(
                table,
                lines,
                notes,
                order_source=Order.OrderSource.STAFF,
                max_lines=getattr(settings, "ORDER_MAX_LINES_STAFF", 50),
                actor_id=actor_id,
            )
        return order

    def create_customer_order(self, table_code, lines, notes="") -> Order:
        """Create a self-service order; the restaurant is taken from the table."""
        with transaction.atomic():
            table = self.uow.lock_table_by_code(table_code)
            order = self._create_order(
                table,
                lines,
                notes,
                order_source=Order.OrderSource.CUSTOMER,
                max_lines=getattr(settings, "ORDER_MAX_LINES_CUSTOMER", 20),
            )
        return order

    def _create_order(self, table, lines, notes, order_source, max_lines, actor_id=None):
        if not table.accepts_orders:
            raise TableUnavailable(table)

        cart = self.resolver.resolve(table.restaurant_id, lines, max_lines=max_lines)
        self._check_amount(cart.total)

        created_at = self.clock()

        def attempt(attempt_number):
            order_number = self.allocator.propose(table.restaurant_id)
            return self.uow.insert_order_graph(
                table=table,
                cart=cart,
                order_number=order_number,
                order_source=order_source,
                notes=(notes or "").strip(),
                created_at=created_at,
            )

        outcome = retry_on_duplicate(attempt, self.max_attempts)
        order = outcome.order

        self.uow.mark_table_occupied(table)

        logger.info(
            f"Created order {order.order_number} ({order_source}) on table {table.number} "
            f"for restaurant {table.restaurant_id}: total={order.total_amount}"
        )
        OrderAuditLogger.log_order_creation(order, item_count=cart.item_count, actor_id=actor_id)

        order = self.queries.get_order(order.id)
        self._publish_on_commit(ORDER_NEW, order)
        return order

    @staticmethod
    def _check_amount(total):
        min_total = getattr(settings, "ORDER_MIN_TOTAL", Decimal("0.01"))
        max_total = getattr(settings, "ORDER_MAX_TOTAL", Decimal("10000.00"))
        if total <= 0 or total < min_total or total > max_total:
            raise InvalidOrderAmount(total)

    # --- Status changes ---

    def update_status(self, order_id, status, notes=None, estimated_time=None, actor_id=None) -> Order:
        """
        Move an order to ``status``, appending ``notes`` when given.

        Entering COMPLETED or CANCELLED frees the table when no other order on
        it is still active. The status write and the table release share one
        transaction and the table row lock.

        Raises:
            OrderNotFound, OrderValidationError, InvalidStatusTransition
        """
        with transaction.atomic():
            order = self.uow.lock_order(order_id)
            previous_status = order.status
            new_status = StatusTransitionValidator.validate_transition(previous_status, status)

            now = self.clock()
            order.status = new_status
            update_fields = ["status", "updated_at"]

            if notes:
                order.notes = self.append_notes(order.notes, notes)
                update_fields.append("notes")

            if estimated_time is not None:
                order.estimated_time = estimated_time
                update_fields.append("estimated_time")

            if new_status == Order.OrderStatus.COMPLETED:
                order.completed_at = now
                update_fields.append("completed_at")
            elif new_status == Order.OrderStatus.CANCELLED:
                order.cancelled_at = now
                update_fields.append("cancelled_at")

            order.save(update_fields=update_fields)

            if StatusTransitionValidator.requires_occupancy_check(new_status):
                table = self.uow.lock_table_by_id(order.restaurant_id, order.table_id)
                self.uow.release_table_if_idle(table, excluding_order_id=order.id)

            logger.info(f"Order {order.order_number} status {previous_status} -> {new_status}")
            OrderAuditLogger.log_status_change(
                order,
                from_status=previous_status,
                to_status=new_status,
                actor_id=actor_id,
                estimated_time=estimated_time,
            )

            order = self.queries.get_order(order.id)
            self._publish_on_commit(ORDER_STATUS, order, previous_status=previous_status)
        return order

    def cancel_order(self, order_id, reason=None, actor_id=None) -> Order:
        return self.update_status(
            order_id, Order.OrderStatus.CANCELLED, notes=reason, actor_id=actor_id
        )

    @staticmethod
    def append_notes(existing, addition):
        addition = addition.strip()
        if not addition:
            return existing
        return f"{existing}{NOTES_SEPARATOR}{addition}" if existing else addition

    # --- Events ---

    def _publish_on_commit(self, event_type, order, previous_status=None):
        transaction.on_commit(lambda: self._publish(event_type, order, previous_status))

    def _publish(self, event_type, order, previous_status=None):
        try:
            event = build_order_event(event_type, order, previous_status=previous_status)
            self.event_sink.publish(event)
        except Exception as e:
            logger.error(f"Failed to publish {event_type} for order {order.order_number}: {e}")
