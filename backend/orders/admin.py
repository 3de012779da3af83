from django.contrib import admin
from .models import Order, OrderItem, OrderItemModifier


class OrderItemModifierInline(admin.TabularInline):
    model = OrderItemModifier
    extra = 0
    readonly_fields = ("modifier", "price")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("menu_item", "quantity", "price", "notes", "get_line_item_total")
    fields = ("menu_item", "quantity", "price", "notes", "get_line_item_total")
    can_delete = False

    def get_line_item_total(self, obj):
        return f"{obj.subtotal:,.2f}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-only view of orders. Orders change only through the order service,
    so status and totals are not editable here.
    """

    list_display = (
        "order_number",
        "restaurant",
        "table",
        "status",
        "payment_status",
        "order_source",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "order_source", "restaurant", "created_at")
    search_fields = ("order_number",)
    ordering = ("-created_at",)
    readonly_fields = (
        "id",
        "order_number",
        "restaurant",
        "table",
        "status",
        "payment_status",
        "order_source",
        "total_amount",
        "notes",
        "estimated_time",
        "created_at",
        "updated_at",
        "completed_at",
        "cancelled_at",
    )
    inlines = [OrderItemInline]

    def has_add_permission(self, request):
        return False


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("order", "menu_item", "quantity", "price")
    readonly_fields = ("order", "menu_item", "quantity", "price", "notes")
    inlines = [OrderItemModifierInline]

    def has_add_permission(self, request):
        return False
