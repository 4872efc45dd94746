from django.contrib import admin
from workorderhistory.models import WorkOrderHistory
from .models import WorkOrder, WorkOrderTask, WorkOrderMaterial, WorkOrderEvidence


class WorkOrderTaskInline(admin.TabularInline):
    model = WorkOrderTask
    extra = 0
    fields = ('title', 'is_done', 'done_at')
    readonly_fields = ('done_at',)


class WorkOrderMaterialInline(admin.TabularInline):
    model = WorkOrderMaterial
    extra = 0
    fields = ('description', 'inventory_item', 'quantity', 'unit_cost', 'approved_by', 'approved_at')
    readonly_fields = ('approved_by', 'approved_at')


class WorkOrderHistoryInline(admin.TabularInline):
    model = WorkOrderHistory
    extra = 0
    can_delete = False
    readonly_fields = ('previous_status', 'new_status', 'changed_by', 'note', 'created_at')
    fields = ('previous_status', 'new_status', 'changed_by', 'note', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(WorkOrder)
class WorkOrderAdmin(admin.ModelAdmin):
    list_display = (
        'code',
        'vehicle',
        'assigned_to_employee',
        'status',
        'priority',
        'estimated_cost',
        'actual_cost',
        'created_at'
    )
    list_filter = (
        'status',
        'priority',
        'created_at',
        'updated_at'
    )
    search_fields = (
        'code',
        'vehicle__plate',
        'vehicle__economic_number',
        'description'
    )
    # Status e datas do fluxo só mudam pelas ações do ciclo de manutenção
    readonly_fields = (
        'id',
        'code',
        'diagnostic',
        'status',
        'start_date',
        'completed_date',
        'validated_at',
        'validated_by',
        'created_at',
        'updated_at'
    )
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'
    inlines = [WorkOrderTaskInline, WorkOrderMaterialInline, WorkOrderHistoryInline]

    fieldsets = (
        ('Identificação', {
            'fields': ('code', 'diagnostic', 'status', 'priority')
        }),
        ('Relacionamentos', {
            'fields': ('vehicle', 'assigned_to_employee')
        }),
        ('Descrição do Serviço', {
            'fields': ('description', 'notes')
        }),
        ('Datas', {
            'fields': (
                'start_date',
                'completed_date',
                'validated_at',
                'validated_by'
            )
        }),
        ('Financeiro', {
            'fields': ('estimated_cost', 'actual_cost'),
            'classes': ('collapse',)
        }),
        ('Controle', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        # OT nasce da aprovação de um diagnóstico
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(WorkOrderEvidence)
class WorkOrderEvidenceAdmin(admin.ModelAdmin):
    list_display = ('work_order', 'description', 'uploaded_by', 'created_at')
    search_fields = ('work_order__code', 'description')
