from django.contrib import admin
from .models import Diagnostic


@admin.register(Diagnostic)
class DiagnosticAdmin(admin.ModelAdmin):
    list_display = ('id', 'report', 'employee', 'severity', 'estimated_cost', 'approved_at')
    list_filter = ('severity', 'requires_additional_tests', 'approved_at')
    search_fields = ('diagnosis', 'report__vehicle__plate', 'employee__first_name', 'employee__last_name')
    readonly_fields = ('id', 'approved_by', 'approved_at', 'created_at', 'updated_at')

    fieldsets = (
        ('Reporte', {
            'fields': ('report', 'employee')
        }),
        ('Avaliação', {
            'fields': (
                'diagnosis', 'recommendations', 'severity', 'estimated_cost',
                'estimated_repair_time', 'required_materials', 'requires_additional_tests'
            )
        }),
        ('Veículo', {
            'fields': ('odometer', 'vehicle_condition', 'fuel_level')
        }),
        ('Aprovação', {
            'fields': ('approved_by', 'approved_at')
        }),
        ('Controle', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_delete_permission(self, request, obj=None):
        return False
