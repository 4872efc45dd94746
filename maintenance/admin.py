from django.contrib import admin
from .models import ServiceCategory, ScheduledMaintenance


@admin.register(ServiceCategory)
class ServiceCategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'active', 'created_at')
    list_filter = ('active',)
    search_fields = ('name',)


@admin.register(ScheduledMaintenance)
class ScheduledMaintenanceAdmin(admin.ModelAdmin):
    list_display = ('title', 'vehicle', 'category', 'frequency', 'next_due_date', 'status')
    list_filter = ('status', 'frequency', 'category')
    search_fields = ('title', 'vehicle__plate', 'vehicle__economic_number')
    readonly_fields = ('id', 'last_completed_at', 'created_at', 'updated_at')
    date_hierarchy = 'next_due_date'
