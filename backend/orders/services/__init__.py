"""
Orders services package - the order lifecycle engine.

- CatalogResolver: prices requested lines against the live menu
- OrderNumberAllocator: proposes ORD-YYYYMMDD-NNNN numbers per restaurant/day
- StatusTransitionValidator: the order status state machine
- OrderUnitOfWork: locked reads and the order-graph insert used by the coordinator
- OrderService: transaction coordinator for creation and status changes
- OrderQueryService: read side (lookups, listings, kitchen view, statistics)
- Event sinks: post-commit delivery of order:new / order:status events
"""

# Catalog resolution
from .catalog_service import CatalogResolver, RequestedLine, ResolvedCart, ResolvedLine, ResolvedModifier

# Order numbers
from .order_number_service import OrderNumberAllocator

# Status workflow
from .status_service import (
    CANCELLABLE_STATUSES,
    OCCUPYING_STATUSES,
    VALID_STATUS_TRANSITIONS,
    StatusTransitionValidator,
)

# Persistence
from .unit_of_work import OrderUnitOfWork, PersistOutcome, PersistResult, retry_on_duplicate

# Reads
from .query_service import OrderQueryService

# Events
from .notification_service import (
    ChannelLayerEventSink,
    NullEventSink,
    OrderEvent,
    RecordingEventSink,
    get_default_event_sink,
)

# Coordinator
from .order_service import OrderService

__all__ = [
    # Catalog
    'CatalogResolver',
    'RequestedLine',
    'ResolvedCart',
    'ResolvedLine',
    'ResolvedModifier',
    # Order numbers
    'OrderNumberAllocator',
    # Status
    'CANCELLABLE_STATUSES',
    'OCCUPYING_STATUSES',
    'VALID_STATUS_TRANSITIONS',
    'StatusTransitionValidator',
    # Persistence
    'OrderUnitOfWork',
    'PersistOutcome',
    'PersistResult',
    'retry_on_duplicate',
    # Reads
    'OrderQueryService',
    # Events
    'ChannelLayerEventSink',
    'NullEventSink',
    'OrderEvent',
    'RecordingEventSink',
    'get_default_event_sink',
    # Coordinator
    'OrderService',
]
