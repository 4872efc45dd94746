"""
Motor do ciclo de manutenção: reporte -> diagnóstico -> ordem de trabalho -> validação.

Cada ação roda em uma única transação: lê o estado atual com
``select_for_update``, valida todas as pré-condições e só então grava a
transição junto com seus efeitos (reporte, OT, veículo, histórico e
notificação). Se algo falhar no meio, nada é gravado.
"""
import functools
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from diagnostics.models import Diagnostic, Severity
from employees.models import Employee
from notifications.models import NotificationKind
from notifications.services import notify
from reports.models import Report, ReportStatus
from vehicles.models import Vehicle, VehicleStatus
from workorder.models import Priority, WorkOrder, WorkOrderStatus
from workorderhistory.models import WorkOrderHistory

from .exceptions import (
    Forbidden,
    InvalidTransition,
    LifecycleError,
    NotFound,
    StorageFailure,
    ValidationError,
)
from .transitions import (
    REPORT_TRANSITIONS,
    WORK_ORDER_AUTO_ADVANCE,
    WORK_ORDER_REOPENABLE,
    WORK_ORDER_TRANSITIONS,
    can_transition,
)

logger = logging.getLogger(__name__)


# Campos de Diagnostic que podem ser informados por quem diagnostica
DIAGNOSTIC_FIELDS = (
    'diagnosis',
    'recommendations',
    'estimated_cost',
    'odometer',
    'vehicle_condition',
    'fuel_level',
    'severity',
    'estimated_repair_time',
    'required_materials',
    'requires_additional_tests',
)

SEVERITY_PRIORITY = {
    Severity.LOW: Priority.LOW,
    Severity.MEDIUM: Priority.NORMAL,
    Severity.HIGH: Priority.HIGH,
    Severity.CRITICAL: Priority.URGENT,
}


def lifecycle_action(func):
    """
    Registra recusas em WARNING e converte erros de banco em StorageFailure.

    A conversão acontece fora do ``transaction.atomic`` da ação, ou seja,
    depois do rollback.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LifecycleError as exc:
            logger.warning('%s recusado: %s', func.__name__, exc.message)
            raise
        except DatabaseError as exc:
            logger.exception('Falha de persistência em %s', func.__name__)
            raise StorageFailure(
                'Falha ao gravar no banco; nenhuma alteração foi aplicada.',
                operation=func.__name__,
            ) from exc
    return wrapper


def _lock(model, pk, label):
    try:
        return model.objects.select_for_update().get(pk=pk)
    except (model.DoesNotExist, DjangoValidationError, ValueError, TypeError):
        raise NotFound(f'{label} não encontrado.', id=str(pk))


def _get(model, pk, label):
    try:
        return model.objects.get(pk=pk)
    except (model.DoesNotExist, DjangoValidationError, ValueError, TypeError):
        raise NotFound(f'{label} não encontrado.', id=str(pk))


def _require_supervisor(actor, action):
    if not actor.can_supervise:
        raise Forbidden(f'Apenas administradores ou supervisores podem {action}.')


def _require_administrator(actor, action):
    if not actor.is_administrator:
        raise Forbidden(f'Apenas administradores podem {action}.')


def _is_employee_user(actor, employee):
    return employee is not None and employee.user_id is not None and employee.user_id == actor.pk


def _set_report_status(report, target):
    if not can_transition(REPORT_TRANSITIONS, report.status, target):
        raise InvalidTransition(
            f'Reporte não pode passar de "{report.status}" para "{target}".',
            current_status=report.status,
            target_status=target,
        )
    report.status = target


def _apply_diagnostic_fields(diagnostic, fields):
    unknown = set(fields) - set(DIAGNOSTIC_FIELDS)
    if unknown:
        raise ValidationError(
            'Campos não permitidos no diagnóstico.',
            errors={name: ['Campo não permitido.'] for name in sorted(unknown)},
        )
    for name, value in fields.items():
        setattr(diagnostic, name, value)
    try:
        diagnostic.full_clean()
    except DjangoValidationError as exc:
        raise ValidationError('Diagnóstico inválido.', errors=exc.message_dict)


def _record_history(work_order, previous, new, actor, note=''):
    return WorkOrderHistory.objects.create(
        work_order=work_order,
        previous_status=previous or '',
        new_status=new,
        changed_by=actor,
        note=note or '',
    )


def _open_work_orders(vehicle_id, exclude_pk=None):
    qs = WorkOrder.objects.filter(vehicle_id=vehicle_id).exclude(status=WorkOrderStatus.VALIDATED)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs


def _set_vehicle_status(vehicle_id, status):
    vehicle = _lock(Vehicle, vehicle_id, 'Veículo')
    if vehicle.status != status:
        vehicle.status = status
        vehicle.save(update_fields=['status', 'updated_at'])
    return vehicle


# ---------------------------------------------------------------------------
# Reporte
# ---------------------------------------------------------------------------

@lifecycle_action
def assign_report(report_id, employee_id, actor):
    """Atribui o reporte a um funcionário e o coloca em diagnóstico."""
    _require_supervisor(actor, 'atribuir reportes')

    with transaction.atomic():
        report = _lock(Report, report_id, 'Reporte')
        employee = _get(Employee, employee_id, 'Funcionário')

        if report.status == ReportStatus.DIAGNOSTICO and report.assigned_to_employee_id == employee.pk:
            return report

        if not employee.is_active:
            raise ValidationError(
                'Funcionário inativo.',
                errors={'employee_id': ['O funcionário está inativo.']},
            )

        if report.status == ReportStatus.DIAGNOSTICO:
            if report.diagnostics.exists():
                raise InvalidTransition(
                    'Reporte já possui diagnóstico; não pode ser reatribuído.',
                    current_status=report.status,
                )
        elif report.status == ReportStatus.PENDING:
            _set_report_status(report, ReportStatus.DIAGNOSTICO)
        else:
            raise InvalidTransition(
                f'Reporte em "{report.status}" não pode ser atribuído.',
                current_status=report.status,
            )

        report.assigned_to_employee = employee
        report.assigned_at = timezone.now()
        report.save(update_fields=['status', 'assigned_to_employee', 'assigned_at', 'updated_at'])

        notify(
            NotificationKind.REPORT,
            'Reporte atribuído',
            f'{report} atribuído a {employee.full_name}.',
        )

    logger.info('Reporte %s atribuído ao funcionário %s por %s', report.pk, employee.pk, actor.pk)
    return report


@lifecycle_action
def reject_report(report_id, actor):
    """
    Devolve um reporte em diagnóstico para ``pending``.

    Remove os diagnósticos abertos e limpa a atribuição, permitindo
    atribuir e diagnosticar de novo.
    """
    with transaction.atomic():
        report = _lock(Report, report_id, 'Reporte')

        if not actor.is_administrator:
            employee = report.assigned_to_employee
            if not _is_employee_user(actor, employee):
                raise Forbidden('Apenas o funcionário atribuído ou um administrador pode rejeitar o reporte.')

        if report.status != ReportStatus.DIAGNOSTICO:
            raise InvalidTransition(
                f'Reporte em "{report.status}" não pode ser rejeitado.',
                current_status=report.status,
            )

        removed, _ = report.diagnostics.filter(approved_at__isnull=True).delete()

        _set_report_status(report, ReportStatus.PENDING)
        report.assigned_to_employee = None
        report.assigned_at = None
        report.save(update_fields=['status', 'assigned_to_employee', 'assigned_at', 'updated_at'])

        notify(
            NotificationKind.REPORT,
            'Reporte devolvido',
            f'{report} voltou para pendente.',
        )

    logger.info('Reporte %s rejeitado por %s (%s diagnóstico(s) removido(s))', report.pk, actor.pk, removed)
    return report


# ---------------------------------------------------------------------------
# Diagnóstico
# ---------------------------------------------------------------------------

@lifecycle_action
def create_diagnostic(report_id, employee_id, fields, actor):
    """Registra o diagnóstico do funcionário atribuído. O status do reporte não muda."""
    with transaction.atomic():
        report = _lock(Report, report_id, 'Reporte')
        employee = _get(Employee, employee_id, 'Funcionário')

        if report.status != ReportStatus.DIAGNOSTICO:
            raise InvalidTransition(
                'O reporte precisa estar em diagnóstico.',
                current_status=report.status,
            )
        if report.diagnostics.filter(approved_at__isnull=True).exists():
            raise InvalidTransition(
                'O reporte já possui um diagnóstico em aberto.',
                current_status=report.status,
            )
        if not actor.is_administrator:
            # Administrador pode registrar por qualquer funcionário
            if report.assigned_to_employee_id != employee.pk:
                raise Forbidden('O funcionário informado não está atribuído a este reporte.')
            if not _is_employee_user(actor, employee):
                raise Forbidden('Apenas o funcionário atribuído pode diagnosticar este reporte.')

        diagnostic = Diagnostic(report=report, employee=employee)
        _apply_diagnostic_fields(diagnostic, fields)
        diagnostic.save()

        notify(
            NotificationKind.DIAGNOSTIC,
            'Novo diagnóstico',
            f'{employee.full_name} diagnosticou {report}.',
        )

    logger.info('Diagnóstico %s criado para o reporte %s', diagnostic.pk, report.pk)
    return diagnostic


@lifecycle_action
def update_diagnostic(diagnostic_id, fields, actor):
    with transaction.atomic():
        diagnostic = _lock(Diagnostic, diagnostic_id, 'Diagnóstico')

        if diagnostic.approved_at is not None:
            raise InvalidTransition('Diagnóstico aprovado não pode ser alterado.')
        if not actor.is_administrator and not _is_employee_user(actor, diagnostic.employee):
            raise Forbidden('Apenas o funcionário que diagnosticou pode alterar o diagnóstico.')

        _apply_diagnostic_fields(diagnostic, fields)
        diagnostic.save()

    logger.info('Diagnóstico %s atualizado por %s', diagnostic.pk, actor.pk)
    return diagnostic


@lifecycle_action
def approve_diagnostic(diagnostic_id, actor):
    """
    Aprova o diagnóstico, gera exatamente uma OT pendente e coloca o
    reporte em andamento. Retorna ``(work_order, report)``.
    """
    _require_supervisor(actor, 'aprovar diagnósticos')

    with transaction.atomic():
        # Ordem de travas: reporte antes do diagnóstico, como em reject_report
        report_id = _get(Diagnostic, diagnostic_id, 'Diagnóstico').report_id
        report = _lock(Report, report_id, 'Reporte')
        diagnostic = _lock(Diagnostic, diagnostic_id, 'Diagnóstico')

        if diagnostic.approved_at is not None:
            raise InvalidTransition('Diagnóstico já aprovado.', diagnostic_id=str(diagnostic.pk))
        if report.status != ReportStatus.DIAGNOSTICO:
            raise InvalidTransition(
                'O reporte precisa estar em diagnóstico.',
                current_status=report.status,
            )

        diagnostic.approved_at = timezone.now()
        diagnostic.approved_by = actor
        diagnostic.save(update_fields=['approved_at', 'approved_by', 'updated_at'])

        work_order = WorkOrder.objects.create(
            diagnostic=diagnostic,
            vehicle_id=report.vehicle_id,
            assigned_to_employee_id=diagnostic.employee_id,
            status=WorkOrderStatus.PENDING,
            priority=SEVERITY_PRIORITY.get(diagnostic.severity, Priority.NORMAL),
            description=diagnostic.recommendations or diagnostic.diagnosis,
            estimated_cost=diagnostic.estimated_cost,
        )
        _record_history(work_order, '', WorkOrderStatus.PENDING, actor, 'OT gerada pela aprovação do diagnóstico')

        _set_report_status(report, ReportStatus.IN_PROGRESS)
        report.save(update_fields=['status', 'updated_at'])

        notify(
            NotificationKind.WORK_ORDER,
            'Diagnóstico aprovado',
            f'Ordem de trabalho {work_order.code} criada para {report}.',
        )

    logger.info('Diagnóstico %s aprovado; OT %s criada', diagnostic.pk, work_order.code)
    return work_order, report


# ---------------------------------------------------------------------------
# Ordem de trabalho
# ---------------------------------------------------------------------------

def ensure_work_order_editable(work_order):
    """OT validada fica congelada, inclusive tarefas, materiais e evidências."""
    if work_order.status == WorkOrderStatus.VALIDATED:
        raise InvalidTransition(
            f'OT {work_order.code} já foi validada e não pode ser alterada.',
            current_status=work_order.status,
        )


def _lock_work_order(work_order_id):
    """Trava o reporte âncora e depois a OT; retorna ``(work_order, report)``."""
    work_order = _get(WorkOrder, work_order_id, 'Ordem de trabalho')
    report = _lock(Report, work_order.diagnostic.report_id, 'Reporte')
    return _lock(WorkOrder, work_order_id, 'Ordem de trabalho'), report


def _resolve_report_if_done(report_id):
    report = _lock(Report, report_id, 'Reporte')
    pending = WorkOrder.objects.filter(diagnostic__report_id=report_id).exclude(
        status=WorkOrderStatus.VALIDATED
    )
    if pending.exists() or report.status == ReportStatus.RESOLVED:
        return report

    _set_report_status(report, ReportStatus.RESOLVED)
    report.resolved_at = timezone.now()
    report.save(update_fields=['status', 'resolved_at', 'updated_at'])
    return report


@lifecycle_action
def advance_work_order(work_order_id, target_status, actor, note=''):
    """
    Avança a OT um passo no fluxo. Ao concluir, segue direto para
    aguardando validação; validar exige administrador.
    """
    if target_status not in WorkOrderStatus.values:
        raise ValidationError(
            'Status inválido.',
            errors={'target_status': [f'"{target_status}" não é um status de OT.']},
        )
    target_status = WorkOrderStatus(target_status)

    with transaction.atomic():
        work_order, report = _lock_work_order(work_order_id)

        if target_status == WorkOrderStatus.VALIDATED:
            _require_administrator(actor, 'validar ordens de trabalho')

        current = work_order.status
        if not can_transition(WORK_ORDER_TRANSITIONS, current, target_status):
            raise InvalidTransition(
                f'OT não pode passar de "{current}" para "{target_status}".',
                current_status=current,
                target_status=target_status,
            )

        now = timezone.now()
        update_fields = ['status', 'updated_at']
        work_order.status = target_status

        if target_status == WorkOrderStatus.IN_PROGRESS:
            if work_order.start_date is None:
                work_order.start_date = now
                update_fields.append('start_date')
        elif target_status == WorkOrderStatus.COMPLETED:
            work_order.completed_date = now
            update_fields.append('completed_date')
        elif target_status == WorkOrderStatus.VALIDATED:
            work_order.validated_at = now
            work_order.validated_by = actor
            update_fields += ['validated_at', 'validated_by']

        _record_history(work_order, current, target_status, actor, note)

        follow_up = WORK_ORDER_AUTO_ADVANCE.get(target_status)
        if follow_up is not None:
            _record_history(work_order, target_status, follow_up, actor, 'Enviada para validação')
            work_order.status = follow_up

        work_order.save(update_fields=update_fields)

        if target_status == WorkOrderStatus.IN_PROGRESS:
            _set_vehicle_status(work_order.vehicle_id, VehicleStatus.IN_SERVICE)
        elif target_status == WorkOrderStatus.VALIDATED:
            _resolve_report_if_done(report.pk)
            others_open = _open_work_orders(work_order.vehicle_id, exclude_pk=work_order.pk).exists()
            _set_vehicle_status(
                work_order.vehicle_id,
                VehicleStatus.IN_SERVICE if others_open else VehicleStatus.ACTIVE,
            )

        notify(
            NotificationKind.WORK_ORDER,
            'Ordem de trabalho atualizada',
            f'OT {work_order.code}: {current} -> {work_order.status}.',
        )

    logger.info('OT %s: %s -> %s por %s', work_order.code, current, work_order.status, actor.pk)
    return work_order


@lifecycle_action
def reopen_work_order(work_order_id, actor, note=''):
    """
    Reabre uma OT aguardando validação ou validada, desfazendo a validação.
    Reporte volta para em andamento e o veículo para em serviço.
    """
    _require_administrator(actor, 'reabrir ordens de trabalho')

    with transaction.atomic():
        work_order, report = _lock_work_order(work_order_id)

        current = work_order.status
        if current not in WORK_ORDER_REOPENABLE:
            raise InvalidTransition(
                f'OT em "{current}" não pode ser reaberta.',
                current_status=current,
            )

        work_order.status = WorkOrderStatus.IN_PROGRESS
        work_order.completed_date = None
        work_order.validated_at = None
        work_order.validated_by = None
        work_order.save(update_fields=['status', 'completed_date', 'validated_at', 'validated_by', 'updated_at'])
        _record_history(work_order, current, WorkOrderStatus.IN_PROGRESS, actor, note or 'OT reaberta')

        if report.status == ReportStatus.RESOLVED:
            _set_report_status(report, ReportStatus.IN_PROGRESS)
            report.resolved_at = None
            report.save(update_fields=['status', 'resolved_at', 'updated_at'])

        _set_vehicle_status(work_order.vehicle_id, VehicleStatus.IN_SERVICE)

        notify(
            NotificationKind.WORK_ORDER,
            'Ordem de trabalho reaberta',
            f'OT {work_order.code} voltou para em andamento.',
        )

    logger.info('OT %s reaberta (%s) por %s', work_order.code, current, actor.pk)
    return work_order


# ---------------------------------------------------------------------------
# Limpeza
# ---------------------------------------------------------------------------

def _release_vehicles(vehicle_ids):
    return Vehicle.objects.filter(
        pk__in=vehicle_ids,
        status=VehicleStatus.IN_SERVICE,
    ).update(status=VehicleStatus.ACTIVE, updated_at=timezone.now())


@lifecycle_action
def clear_reports(actor):
    """
    Apaga todas as OTs (com tarefas, materiais, evidências e histórico),
    diagnósticos e reportes, liberando os veículos que estavam em serviço.
    """
    _require_administrator(actor, 'limpar os reportes')

    with transaction.atomic():
        list(Report.objects.select_for_update().values_list('pk', flat=True))
        vehicle_ids = set(WorkOrder.objects.values_list('vehicle_id', flat=True))

        # Ordem importa: OT protege diagnóstico, que protege reporte
        work_orders = WorkOrder.objects.count()
        WorkOrder.objects.all().delete()
        diagnostics, _ = Diagnostic.objects.all().delete()
        reports, _ = Report.objects.all().delete()

        vehicles_reset = _release_vehicles(vehicle_ids)

    counts = {
        'reports': reports,
        'diagnostics': diagnostics,
        'work_orders': work_orders,
        'vehicles_reset': vehicles_reset,
    }
    logger.info('Reportes limpos por %s: %s', actor.pk, counts)
    return counts
