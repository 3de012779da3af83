import logging
import re
from datetime import datetime, time, timedelta

from django.db.models.functions import Length
from django.utils import timezone

from orders.models import Order

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "ORD"
SEQUENCE_WIDTH = 4


def local_day_bounds(moment):
    """
    Return ``(start, end)`` of the local calendar day containing ``moment``.
    ``end`` is the start of the next day and is exclusive.
    """
    local = timezone.localtime(moment)
    start = timezone.make_aware(datetime.combine(local.date(), time.min))
    return start, start + timedelta(days=1)


class OrderNumberAllocator:
    """
    Proposes human-readable order numbers of the form ``ORD-YYYYMMDD-NNNN``.

    Numbers are scoped per restaurant and per local calendar day. A proposal is
    an optimistic guess: the ``unique_order_number_per_restaurant`` constraint
    decides, and the caller retries with a fresh proposal on conflict.

    The sequence is the larger of the day's order count and the highest suffix
    already issued with today's prefix, plus one. Using the highest suffix keeps
    proposals moving forward after a collision even when the count lags.
    """

    def __init__(self, clock=None):
        self.clock = clock or timezone.now

    def day_prefix(self, moment=None) -> str:
        local_date = timezone.localtime(moment or self.clock()).date()
        return f"{ORDER_NUMBER_PREFIX}-{local_date:%Y%m%d}-"

    def propose(self, restaurant_id) -> str:
        now = self.clock()
        prefix = self.day_prefix(now)
        start, end = local_day_bounds(now)

        day_count = Order.objects.filter(
            restaurant_id=restaurant_id,
            created_at__gte=start,
            created_at__lt=end,
        ).count()

        sequence = max(day_count, self._highest_issued(restaurant_id, prefix)) + 1
        order_number = f"{prefix}{sequence:0{SEQUENCE_WIDTH}d}"
        logger.debug(f"Proposed order number {order_number} for restaurant {restaurant_id}")
        return order_number

    def _highest_issued(self, restaurant_id, prefix) -> int:
        # Longest first so ORD-...-10000 sorts above ORD-...-9999
        last_number = (
            Order.objects.filter(restaurant_id=restaurant_id, order_number__startswith=prefix)
            .annotate(number_length=Length("order_number"))
            .order_by("-number_length", "-order_number")
            .values_list("order_number", flat=True)
            .first()
        )
        if not last_number:
            return 0

        match = re.match(rf"^{re.escape(prefix)}(\d+)$", last_number)
        return int(match.group(1)) if match else 0
