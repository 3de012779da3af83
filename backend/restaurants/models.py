import uuid
from django.db import models


class Restaurant(models.Model):
    """
    Root entity that owns tables, menu items, modifiers and orders.
    Every lookup made by the order services is scoped to one restaurant.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(
        max_length=255,
        help_text="Display name for the restaurant (e.g., Joe's Pizza)"
    )
    slug = models.SlugField(
        unique=True,
        help_text="URL-safe identifier"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurants'
        ordering = ['name']

    def __str__(self):
        return self.name


class Table(models.Model):
    """
    A physical table that orders are placed against.

    ``code`` is printed on the table's QR card and is what anonymous customers
    use to place and track orders. ``status`` moves between AVAILABLE and
    OCCUPIED only through the order service; RESERVED and MAINTENANCE are
    set by staff and are left alone by the occupancy rule.
    """

    class TableStatus(models.TextChoices):
        AVAILABLE = "AVAILABLE", "Available"
        OCCUPIED = "OCCUPIED", "Occupied"
        RESERVED = "RESERVED", "Reserved"
        MAINTENANCE = "MAINTENANCE", "Maintenance"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(
        Restaurant,
        on_delete=models.CASCADE,
        related_name='tables',
    )
    number = models.PositiveIntegerField()
    code = models.CharField(
        max_length=32,
        unique=True,
        help_text="Customer-facing table code (QR card)"
    )
    capacity = models.PositiveIntegerField(default=4)
    status = models.CharField(
        max_length=20,
        choices=TableStatus.choices,
        default=TableStatus.AVAILABLE,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurant_tables'
        ordering = ['restaurant', 'number']
        constraints = [
            models.UniqueConstraint(
                fields=['restaurant', 'number'],
                name='unique_table_number_per_restaurant'
            ),
        ]

    def __str__(self):
        return f"Table {self.number} ({self.restaurant.name})"

    @property
    def accepts_orders(self):
        return self.status != self.TableStatus.MAINTENANCE
