from django.contrib import admin
from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'vehicle', 'status', 'assigned_to_employee', 'reported_by', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('description', 'vehicle__plate', 'vehicle__economic_number')
    # Status e atribuição seguem o fluxo do ciclo de manutenção
    readonly_fields = ('id', 'status', 'assigned_to_employee', 'assigned_at', 'resolved_at', 'created_at', 'updated_at')
    date_hierarchy = 'created_at'

    def has_delete_permission(self, request, obj=None):
        return False
