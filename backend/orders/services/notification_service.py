"""
Order lifecycle events and the sinks that deliver them.

The coordinator hands an ``OrderEvent`` to an injected ``EventSink`` after its
transaction commits. Sinks are fire-and-forget: delivery failures are logged
and never reach the caller.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

ORDER_NEW = "order:new"
ORDER_STATUS = "order:status"


@dataclass(frozen=True)
class OrderEvent:
    type: str
    order: Dict[str, Any]
    previous_status: Optional[str] = None

    def as_message(self) -> Dict[str, Any]:
        message = {"event": self.type, "order": self.order}
        if self.previous_status is not None:
            message["previous_status"] = self.previous_status
        return message


class EventSink(Protocol):
    def publish(self, event: OrderEvent) -> None:
        ...


class NullEventSink:
    """Discards every event."""

    def publish(self, event: OrderEvent) -> None:
        logger.debug(f"NullEventSink dropped {event.type} for order {event.order.get('order_number')}")


class RecordingEventSink:
    """Keeps published events in memory, for tests and local debugging."""

    def __init__(self):
        self.events: List[OrderEvent] = []

    def publish(self, event: OrderEvent) -> None:
        self.events.append(event)


class ChannelLayerEventSink:
    """
    Publishes order events through the Channels layer.

    Each event goes to the restaurant's kitchen and staff groups and to the
    table group that customer trackers subscribe to.
    """

    message_type = "order_event"

    def __init__(self, channel_layer=None):
        self.channel_layer = channel_layer or get_channel_layer()

    @staticmethod
    def group_names(order: Dict[str, Any]) -> List[str]:
        restaurant_id = order["restaurant"]
        return [
            f"restaurant_{restaurant_id}_kitchen",
            f"restaurant_{restaurant_id}_staff",
            f"table_{order['table']}",
        ]

    def publish(self, event: OrderEvent) -> None:
        if not self.channel_layer:
            logger.warning("No channel layer available for order notifications")
            return

        message = {"type": self.message_type, **event.as_message()}
        for group_name in self.group_names(event.order):
            logger.debug(f"Sending {event.type} to group {group_name}")
            async_to_sync(self.channel_layer.group_send)(group_name, message)


def get_default_event_sink() -> EventSink:
    """Instantiate the sink class named by ``settings.ORDER_EVENT_SINK``."""
    dotted_path = getattr(
        settings,
        "ORDER_EVENT_SINK",
        "orders.services.notification_service.ChannelLayerEventSink",
    )
    return import_string(dotted_path)()


def build_order_event(event_type: str, order, previous_status: Optional[str] = None) -> OrderEvent:
    """Serialize ``order`` into an event payload containing only JSON-safe values."""
    from orders.serializers import OrderSerializer

    return OrderEvent(
        type=event_type,
        order=OrderSerializer(order).data,
        previous_status=previous_status,
    )
