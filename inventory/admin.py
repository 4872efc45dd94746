from django.contrib import admin
from .models import InventoryCategory, InventoryItem, InventoryMovement


@admin.register(InventoryCategory)
class InventoryCategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'part_number', 'category', 'quantity', 'min_quantity', 'unit_price', 'provider')
    list_filter = ('category', 'provider')
    search_fields = ('name', 'part_number', 'location')
    # Saldo muda apenas por movimentação
    readonly_fields = ('id', 'quantity', 'created_at', 'updated_at')


@admin.register(InventoryMovement)
class InventoryMovementAdmin(admin.ModelAdmin):
    list_display = ('item', 'movement_type', 'quantity', 'balance_after', 'reference', 'created_by', 'created_at')
    list_filter = ('movement_type', 'created_at')
    search_fields = ('item__name', 'item__part_number', 'reference', 'notes')
    readonly_fields = ('id', 'created_at')
    date_hierarchy = 'created_at'

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
