"""
Catalog resolution: turns requested cart lines into priced, persistable lines.

The resolver batch-loads menu items and modifiers for one restaurant (one
query each), validates every line against the loaded maps and computes the
order total in ``Decimal``. It never writes.
"""
import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence

from django.conf import settings
from django.db.models import F

from menu.models import MenuItem, Modifier
from orders.exceptions import InvalidModifier, MenuItemUnavailable, OrderValidationError
from orders.money import quantize

logger = logging.getLogger(__name__)


def coerce_uuid(value) -> Optional[uuid.UUID]:
    """Parse ``value`` as a UUID, returning None when it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


@dataclass(frozen=True)
class RequestedLine:
    """One cart line as submitted by staff or a customer."""
    menu_item_id: object
    quantity: int
    modifier_ids: Sequence = ()
    notes: str = ""


@dataclass(frozen=True)
class ResolvedModifier:
    modifier: Modifier
    price: Decimal


@dataclass(frozen=True)
class ResolvedLine:
    menu_item: MenuItem
    item_price: Decimal
    unit_price: Decimal  # item price + selected modifier prices
    quantity: int
    notes: str = ""
    modifiers: List[ResolvedModifier] = field(default_factory=list)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def preparation_time(self) -> Optional[int]:
        return self.menu_item.preparation_time


@dataclass(frozen=True)
class ResolvedCart:
    total: Decimal
    lines: List[ResolvedLine] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)


class CatalogResolver:
    """
    Prices requested lines against the live catalog of one restaurant.

    Limits default to the ``ORDER_MAX_*`` settings and can be overridden per
    instance (tests, or a stricter customer-facing resolver).
    """

    def __init__(self, max_quantity_per_item: Optional[int] = None):
        self.max_quantity_per_item = max_quantity_per_item or getattr(
            settings, "ORDER_MAX_QUANTITY_PER_ITEM", 10
        )

    def resolve(self, restaurant_id, lines: Sequence[RequestedLine], max_lines: Optional[int] = None) -> ResolvedCart:
        """
        Resolve ``lines`` for ``restaurant_id``.

        Raises:
            OrderValidationError: empty cart, bad quantity, too many lines,
                duplicate lines or quantity limit exceeded
            MenuItemUnavailable: an item is missing, unavailable or belongs
                to another restaurant
            InvalidModifier: a modifier is missing, unavailable or not offered
                on its line's item
        """
        normalized = self._normalize(lines, max_lines)

        item_ids = {line.menu_item_id for line in normalized if line.menu_item_id is not None}
        menu_items = {
            item.id: item
            for item in MenuItem.objects.filter(
                id__in=item_ids,
                restaurant_id=restaurant_id,
                is_available=True,
            )
        }

        modifier_ids = {mid for line in normalized for mid in line.modifier_ids if mid is not None}
        modifiers, offered = self._load_modifiers(restaurant_id, modifier_ids, list(menu_items))

        resolved_lines = []
        for requested, line in zip(lines, normalized):
            menu_item = menu_items.get(line.menu_item_id)
            if menu_item is None:
                raise MenuItemUnavailable(requested.menu_item_id)

            selected = []
            for raw_id, modifier_id in zip(requested.modifier_ids, line.modifier_ids):
                modifier = modifiers.get(modifier_id)
                if modifier is None or (menu_item.id, modifier_id) not in offered:
                    raise InvalidModifier(raw_id)
                selected.append(ResolvedModifier(modifier=modifier, price=modifier.price))

            unit_price = menu_item.price + sum((m.price for m in selected), Decimal("0.00"))
            resolved_lines.append(
                ResolvedLine(
                    menu_item=menu_item,
                    item_price=menu_item.price,
                    unit_price=unit_price,
                    quantity=line.quantity,
                    notes=line.notes,
                    modifiers=selected,
                )
            )

        total = quantize(sum((line.subtotal for line in resolved_lines), Decimal("0")))
        logger.debug(
            f"Resolved {len(resolved_lines)} lines for restaurant {restaurant_id}: total={total}"
        )
        return ResolvedCart(total=total, lines=resolved_lines)

    def _normalize(self, lines, max_lines):
        if not lines:
            raise OrderValidationError("Order must contain at least one item")

        if max_lines is not None and len(lines) > max_lines:
            raise OrderValidationError(f"Order cannot contain more than {max_lines} lines")

        normalized = []
        seen = set()
        quantity_per_item = Counter()
        for line in lines:
            quantity = line.quantity
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise OrderValidationError(f"Quantity must be a positive whole number, got {quantity!r}")

            modifier_ids = tuple(coerce_uuid(mid) for mid in line.modifier_ids)
            if len(set(modifier_ids)) != len(modifier_ids):
                raise OrderValidationError("A modifier can only be selected once per line")

            menu_item_id = coerce_uuid(line.menu_item_id)
            key = (menu_item_id or line.menu_item_id, frozenset(modifier_ids))
            if key in seen:
                raise OrderValidationError(
                    f"Duplicate line for menu item {line.menu_item_id}; combine quantities instead"
                )
            seen.add(key)

            quantity_per_item[key[0]] += quantity
            if quantity_per_item[key[0]] > self.max_quantity_per_item:
                raise OrderValidationError(
                    f"Cannot order more than {self.max_quantity_per_item} of menu item {line.menu_item_id}"
                )

            normalized.append(
                RequestedLine(
                    menu_item_id=menu_item_id,
                    quantity=quantity,
                    modifier_ids=modifier_ids,
                    notes=(line.notes or "").strip(),
                )
            )
        return normalized

    def _load_modifiers(self, restaurant_id, modifier_ids, item_ids):
        """
        Return ``(modifiers_by_id, offered)`` where ``offered`` holds the
        ``(menu_item_id, modifier_id)`` pairs whose group is attached to that item.
        """
        if not modifier_ids:
            return {}, set()

        rows = (
            Modifier.objects.filter(
                id__in=modifier_ids,
                restaurant_id=restaurant_id,
                is_available=True,
                group__menu_item_modifier_groups__menu_item_id__in=item_ids,
            )
            .annotate(offered_on_item_id=F("group__menu_item_modifier_groups__menu_item_id"))
        )

        modifiers = {}
        offered = set()
        for modifier in rows:
            modifiers.setdefault(modifier.id, modifier)
            offered.add((modifier.offered_on_item_id, modifier.id))
        return modifiers, offered
