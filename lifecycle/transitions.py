"""
Tabelas de transição do ciclo de manutenção.

As chaves são os próprios enums dos modelos; o teste de exaustividade garante
que todo status novo entre aqui antes de poder ser usado.
"""
from reports.models import ReportStatus
from workorder.models import WorkOrderStatus


REPORT_TRANSITIONS = {
    ReportStatus.PENDING: frozenset({ReportStatus.DIAGNOSTICO}),
    # in_progress: diagnóstico aprovado; pending: diagnóstico rejeitado
    ReportStatus.DIAGNOSTICO: frozenset({ReportStatus.IN_PROGRESS, ReportStatus.PENDING}),
    ReportStatus.IN_PROGRESS: frozenset({ReportStatus.RESOLVED}),
    # Só volta via reabertura da OT validada
    ReportStatus.RESOLVED: frozenset({ReportStatus.IN_PROGRESS}),
}

WORK_ORDER_TRANSITIONS = {
    WorkOrderStatus.PENDING: frozenset({WorkOrderStatus.IN_PROGRESS}),
    WorkOrderStatus.IN_PROGRESS: frozenset({WorkOrderStatus.COMPLETED}),
    WorkOrderStatus.COMPLETED: frozenset({WorkOrderStatus.AWAITING_VALIDATION}),
    WorkOrderStatus.AWAITING_VALIDATION: frozenset({WorkOrderStatus.VALIDATED}),
    WorkOrderStatus.VALIDATED: frozenset(),
}

# Estados a partir dos quais um administrador pode reabrir a OT
WORK_ORDER_REOPENABLE = frozenset({
    WorkOrderStatus.AWAITING_VALIDATION,
    WorkOrderStatus.VALIDATED,
})

# Concluir uma OT a envia direto para validação
WORK_ORDER_AUTO_ADVANCE = {
    WorkOrderStatus.COMPLETED: WorkOrderStatus.AWAITING_VALIDATION,
}


def can_transition(table, current, target):
    return target in table.get(current, frozenset())
