import uuid
from decimal import Decimal
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Order(models.Model):
    # --- Status Fields ---
    class OrderStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")  # Placed, waiting for staff
        CONFIRMED = "CONFIRMED", _("Confirmed")  # Accepted by staff
        PREPARING = "PREPARING", _("Preparing")  # Kitchen is working on it
        READY = "READY", _("Ready")  # Waiting to be served
        DELIVERED = "DELIVERED", _("Delivered")  # Served to the table
        COMPLETED = "COMPLETED", _("Completed")  # Closed out
        CANCELLED = "CANCELLED", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        COMPLETED = "COMPLETED", _("Completed")
        FAILED = "FAILED", _("Failed")
        REFUNDED = "REFUNDED", _("Refunded")

    class OrderSource(models.TextChoices):
        STAFF = "STAFF", _("Staff Terminal")
        CUSTOMER = "CUSTOMER", _("Customer (table QR)")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="orders",
    )
    table = models.ForeignKey(
        "restaurants.Table",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_number = models.CharField(max_length=20)
    status = models.CharField(
        max_length=10, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )
    payment_status = models.CharField(
        max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    order_source = models.CharField(
        max_length=10, choices=OrderSource.choices, default=OrderSource.STAFF
    )

    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Computed once at creation from the snapshotted line prices."),
    )
    notes = models.TextField(blank=True, default="")
    estimated_time = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text=_("Staff override for the preparation estimate, in minutes."),
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        # Show newest orders first, with order_number as secondary sort for same timestamps
        ordering = ["-created_at", "order_number"]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        indexes = [
            models.Index(fields=['restaurant', 'status'], name='order_rest_stat_idx'),
            models.Index(fields=['restaurant', 'created_at'], name='order_rest_created_idx'),
            models.Index(fields=['table', 'status'], name='order_table_stat_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["restaurant", "order_number"],
                name="unique_order_number_per_restaurant",
            ),
        ]

    def __str__(self):
        return f"Order {self.order_number} - {self.status}"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    menu_item = models.ForeignKey(
        "menu.MenuItem", on_delete=models.PROTECT, related_name="order_items"
    )
    quantity = models.PositiveIntegerField(default=1)
    notes = models.TextField(
        blank=True, default="", help_text=_("Customer notes, e.g., 'no onions'")
    )

    # Price snapshot
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Price of the menu item at the time of ordering."),
    )

    class Meta:
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.quantity} of {self.menu_item.name} in Order {self.order.order_number}"

    @property
    def unit_price(self):
        """Item price plus the snapshotted price of every selected modifier."""
        return self.price + sum(
            (modifier.price for modifier in self.modifiers.all()), Decimal("0.00")
        )

    @property
    def subtotal(self):
        return self.unit_price * self.quantity


class OrderItemModifier(models.Model):
    order_item = models.ForeignKey(
        OrderItem, on_delete=models.CASCADE, related_name="modifiers"
    )
    modifier = models.ForeignKey(
        "menu.Modifier", on_delete=models.PROTECT, related_name="order_item_modifiers"
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Modifier price at the time of ordering."),
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.modifier.name} ({self.price})"
