from django.contrib import admin
from .models import Restaurant, Table


class TableInline(admin.TabularInline):
    model = Table
    extra = 0
    fields = ['number', 'code', 'capacity', 'status']


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    readonly_fields = ['id', 'created_at', 'updated_at']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [TableInline]


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ['number', 'restaurant', 'code', 'capacity', 'status']
    list_filter = ['status', 'restaurant']
    search_fields = ['code', 'restaurant__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
