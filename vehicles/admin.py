from django.contrib import admin
from .models import Vehicle, VehicleBranchHistory, VehicleType


@admin.register(VehicleType)
class VehicleTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)


class VehicleBranchHistoryInline(admin.TabularInline):
    model = VehicleBranchHistory
    fk_name = 'vehicle'
    extra = 0
    can_delete = False
    fields = ('created_at', 'from_branch', 'to_branch', 'reason', 'transferred_by')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = (
        'plate',
        'economic_number',
        'brand',
        'model',
        'year',
        'client',
        'status',
        'mileage'
    )
    list_filter = ('status', 'fuel_type', 'vehicle_type', 'client')
    search_fields = ('plate', 'economic_number', 'vin', 'brand', 'model', 'client__name')
    readonly_fields = ('id', 'status', 'created_at', 'updated_at')
    ordering = ('plate',)
    inlines = [VehicleBranchHistoryInline]

    fieldsets = (
        ('Identificação', {
            'fields': ('plate', 'economic_number', 'vin', 'status')
        }),
        ('Veículo', {
            'fields': ('vehicle_type', 'brand', 'model', 'year', 'color', 'fuel_type', 'mileage')
        }),
        ('Operação', {
            'fields': ('client', 'branch', 'assigned_area')
        }),
        ('Controle', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        # Sucursal definida só muda por transferência
        if obj is not None and obj.branch_id:
            return self.readonly_fields + ('branch',)
        return self.readonly_fields
