from django.contrib import admin

from .models import WorkOrderHistory


@admin.register(WorkOrderHistory)
class WorkOrderHistoryAdmin(admin.ModelAdmin):
    """Trilha de auditoria das OTs; gravada apenas pelo motor do ciclo."""

    list_display = ('work_order', 'transition', 'changed_by', 'created_at')
    list_filter = ('new_status', 'previous_status')
    list_select_related = ('work_order', 'changed_by')
    search_fields = ('work_order__code', 'work_order__vehicle__plate', 'note', 'changed_by__email')
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)
    fields = ('work_order', 'previous_status', 'new_status', 'changed_by', 'note', 'created_at')
    readonly_fields = fields

    @admin.display(description='Transição')
    def transition(self, obj):
        previous = obj.get_previous_status_display() if obj.previous_status else '-'
        return f'{previous} → {obj.get_new_status_display()}'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
