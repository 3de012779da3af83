from django.contrib import admin
from .models import MenuItem, ModifierGroup, Modifier, MenuItemModifierGroup


class MenuItemModifierGroupInline(admin.TabularInline):
    model = MenuItemModifierGroup
    extra = 0


class ModifierInline(admin.TabularInline):
    model = Modifier
    extra = 0
    fields = ["name", "price", "is_available", "restaurant"]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ["name", "restaurant", "price", "is_available", "preparation_time"]
    list_filter = ["is_available", "restaurant"]
    search_fields = ["name"]
    inlines = [MenuItemModifierGroupInline]


@admin.register(ModifierGroup)
class ModifierGroupAdmin(admin.ModelAdmin):
    list_display = ["name", "restaurant", "min_select", "max_select", "is_required"]
    list_filter = ["restaurant"]
    inlines = [ModifierInline]
