"""
Audit trail for order lifecycle events.

Records go to the ``orders.audit`` logger (see ``LOGGING`` in settings) with
the structured fields attached as ``extra`` so a JSON handler can ship them
as-is.
"""
import logging

audit_logger = logging.getLogger("orders.audit")


class OrderAuditLogger:
    ORDER_CREATED = "ORDER_CREATED"
    ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"

    @staticmethod
    def log(action, order, actor_type, actor_id=None, **details):
        audit_logger.info(
            f"{action} order={order.order_number} restaurant={order.restaurant_id} "
            f"actor={actor_type}:{actor_id or 'anonymous'}",
            extra={
                "audit_action": action,
                "order_id": str(order.id),
                "order_number": order.order_number,
                "restaurant_id": str(order.restaurant_id),
                "table_id": str(order.table_id),
                "actor_type": actor_type,
                "actor_id": str(actor_id) if actor_id is not None else None,
                "details": details,
            },
        )

    @classmethod
    def log_order_creation(cls, order, item_count, actor_id=None):
        cls.log(
            cls.ORDER_CREATED,
            order,
            actor_type=order.order_source,
            actor_id=actor_id,
            total_amount=str(order.total_amount),
            item_count=item_count,
            payment_status=order.payment_status,
        )

    @classmethod
    def log_status_change(cls, order, from_status, to_status, actor_id=None, estimated_time=None):
        cls.log(
            cls.ORDER_STATUS_CHANGED,
            order,
            actor_type="STAFF" if actor_id is not None else "SYSTEM",
            actor_id=actor_id,
            from_status=from_status,
            to_status=to_status,
            estimated_time=estimated_time,
        )
