import uuid
from django.db import models
from django.utils.translation import gettext_lazy as _


class MenuItem(models.Model):
    """
    A sellable item on a restaurant's menu.

    The order services only read menu items: prices are snapshotted onto
    order lines at creation, so editing a price never changes past orders.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="menu_items",
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    is_available = models.BooleanField(
        default=True, help_text=_("Unavailable items cannot be ordered.")
    )
    preparation_time = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text=_("Typical preparation time in minutes."),
    )
    modifier_groups = models.ManyToManyField(
        "ModifierGroup",
        through="MenuItemModifierGroup",
        related_name="menu_items",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["restaurant", "is_available"], name="menu_item_restaurant_avail_idx"),
        ]

    def __str__(self):
        return self.name


class ModifierGroup(models.Model):
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="modifier_groups",
    )
    name = models.CharField(
        max_length=100, help_text=_("Customer-facing name, e.g., 'Choose your size'")
    )
    min_select = models.PositiveIntegerField(
        default=0, help_text=_("Minimum required selections (0 for optional)")
    )
    max_select = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text=_("Maximum allowed selections (null for unlimited)"),
    )
    is_required = models.BooleanField(default=False)

    def __str__(self):
        return self.name


class Modifier(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(
        ModifierGroup, on_delete=models.CASCADE, related_name="modifiers"
    )
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="modifiers",
    )
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        help_text=_("The amount added to the item price."),
    )
    is_available = models.BooleanField(default=True)

    class Meta:
        ordering = ["group", "name"]
        unique_together = ("group", "name")

    def __str__(self):
        return f"{self.group.name} - {self.name}"


class MenuItemModifierGroup(models.Model):
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.CASCADE, related_name="menu_item_modifier_groups"
    )
    group = models.ForeignKey(
        ModifierGroup, on_delete=models.CASCADE, related_name="menu_item_modifier_groups"
    )
    display_order = models.PositiveIntegerField(
        default=0, help_text=_("The order this group appears for this item.")
    )

    class Meta:
        ordering = ["display_order"]
        unique_together = ("menu_item", "group")
