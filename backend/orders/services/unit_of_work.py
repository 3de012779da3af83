"""
Typed unit of work for the order coordinator.

Every method must run inside an open ``transaction.atomic()`` block owned by
the caller; row locks taken here are held until that block commits.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.db import IntegrityError, transaction

from orders.exceptions import OrderNotFound, OrderNumberAllocationFailed, TableNotFound
from orders.models import Order, OrderItem, OrderItemModifier
from restaurants.models import Table

from .catalog_service import ResolvedCart, coerce_uuid
from .status_service import OCCUPYING_STATUSES

logger = logging.getLogger(__name__)

ORDER_NUMBER_CONSTRAINT = "unique_order_number_per_restaurant"


class PersistResult(enum.Enum):
    CREATED = "CREATED"
    DUPLICATE_NUMBER = "DUPLICATE_NUMBER"


@dataclass(frozen=True)
class PersistOutcome:
    """Tagged result of one attempt to insert an order graph."""
    result: PersistResult
    order_number: str
    order: Optional[Order] = None

    @classmethod
    def created(cls, order):
        return cls(result=PersistResult.CREATED, order_number=order.order_number, order=order)

    @classmethod
    def duplicate(cls, order_number):
        return cls(result=PersistResult.DUPLICATE_NUMBER, order_number=order_number)

    @property
    def is_duplicate(self) -> bool:
        return self.result is PersistResult.DUPLICATE_NUMBER


def is_order_number_conflict(exc: IntegrityError) -> bool:
    """
    True when ``exc`` is the order-number uniqueness violation.

    PostgreSQL names the constraint in the message; SQLite names the columns
    (``orders_order.restaurant_id, orders_order.order_number``).
    """
    message = str(exc).lower()
    if ORDER_NUMBER_CONSTRAINT in message:
        return True
    return (
        ("unique constraint failed" in message or "duplicate key value" in message)
        and "order_number" in message
    )


def retry_on_duplicate(attempt_fn: Callable[[int], PersistOutcome], attempts: int) -> PersistOutcome:
    """
    Call ``attempt_fn(attempt)`` until it returns a non-duplicate outcome,
    at most ``attempts`` times.

    Raises:
        OrderNumberAllocationFailed: every attempt hit a duplicate number
    """
    for attempt in range(1, attempts + 1):
        outcome = attempt_fn(attempt)
        if not outcome.is_duplicate:
            return outcome
        logger.warning(
            f"Order number {outcome.order_number} already taken (attempt {attempt}/{attempts})"
        )
    raise OrderNumberAllocationFailed(attempts)


class OrderUnitOfWork:
    """The storage operations the order coordinator is allowed to perform."""

    def lock_table_by_id(self, restaurant_id, table_id) -> Table:
        table_uuid = coerce_uuid(table_id)
        if table_uuid is None:
            raise TableNotFound(table_id)
        try:
            return Table.objects.select_for_update().get(id=table_uuid, restaurant_id=restaurant_id)
        except Table.DoesNotExist:
            raise TableNotFound(table_id)

    def lock_table_by_code(self, table_code) -> Table:
        try:
            return (
                Table.objects.select_for_update(of=("self",))
                .select_related("restaurant")
                .get(code=table_code, restaurant__is_active=True)
            )
        except Table.DoesNotExist:
            raise TableNotFound(table_code)

    def lock_order(self, order_id) -> Order:
        order_uuid = coerce_uuid(order_id)
        if order_uuid is None:
            raise OrderNotFound(order_id)
        try:
            return Order.objects.select_for_update().get(id=order_uuid)
        except Order.DoesNotExist:
            raise OrderNotFound(order_id)

    def insert_order_graph(
        self,
        *,
        table: Table,
        cart: ResolvedCart,
        order_number: str,
        order_source: str,
        notes: str = "",
        created_at=None,
    ) -> PersistOutcome:
        """
        Insert the order, its lines and their modifiers inside a savepoint.

        A duplicate order number rolls the savepoint back and is reported as
        ``DUPLICATE_NUMBER``; any other integrity error propagates.
        """
        try:
            with transaction.atomic():
                order_fields = {
                    "restaurant_id": table.restaurant_id,
                    "table": table,
                    "order_number": order_number,
                    "order_source": order_source,
                    "total_amount": cart.total,
                    "notes": notes or "",
                }
                if created_at is not None:
                    order_fields["created_at"] = created_at
                order = Order.objects.create(**order_fields)

                modifier_rows = []
                for line in cart.lines:
                    item = OrderItem.objects.create(
                        order=order,
                        menu_item=line.menu_item,
                        quantity=line.quantity,
                        price=line.item_price,
                        notes=line.notes,
                    )
                    modifier_rows.extend(
                        OrderItemModifier(order_item=item, modifier=selected.modifier, price=selected.price)
                        for selected in line.modifiers
                    )
                if modifier_rows:
                    OrderItemModifier.objects.bulk_create(modifier_rows)
        except IntegrityError as exc:
            if is_order_number_conflict(exc):
                return PersistOutcome.duplicate(order_number)
            raise

        return PersistOutcome.created(order)

    def mark_table_occupied(self, table: Table) -> bool:
        """AVAILABLE -> OCCUPIED. Other statuses are left untouched."""
        if table.status != Table.TableStatus.AVAILABLE:
            return False
        table.status = Table.TableStatus.OCCUPIED
        table.save(update_fields=["status", "updated_at"])
        logger.info(f"Table {table.number} ({table.id}) marked OCCUPIED")
        return True

    def release_table_if_idle(self, table: Table, excluding_order_id) -> bool:
        """
        OCCUPIED -> AVAILABLE when no order other than ``excluding_order_id`` is
        still in an occupying status on ``table``.
        """
        if table.status != Table.TableStatus.OCCUPIED:
            return False

        still_active = (
            Order.objects.filter(table_id=table.id, status__in=OCCUPYING_STATUSES)
            .exclude(id=excluding_order_id)
            .exists()
        )
        if still_active:
            return False

        table.status = Table.TableStatus.AVAILABLE
        table.save(update_fields=["status", "updated_at"])
        logger.info(f"Table {table.number} ({table.id}) released to AVAILABLE")
        return True
