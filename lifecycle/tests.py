from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from diagnostics.models import Diagnostic
from employees.models import Employee, EmployeeType
from inventory.models import InventoryItem
from notifications.models import Notification
from reports.models import Report, ReportStatus
from vehicles.models import Vehicle, VehicleStatus
from workorder.models import (
    Priority,
    WorkOrder,
    WorkOrderMaterial,
    WorkOrderStatus,
    WorkOrderTask,
)
from workorder.services import approve_material
from workorderhistory.models import WorkOrderHistory

from . import services
from .exceptions import (
    Forbidden,
    InvalidTransition,
    NotFound,
    StorageFailure,
    ValidationError,
)
from .transitions import (
    REPORT_TRANSITIONS,
    WORK_ORDER_REOPENABLE,
    WORK_ORDER_TRANSITIONS,
)


User = get_user_model()


class FleetFixtureMixin:
    """Frota mínima: usuários por papel, dois técnicos e um veículo com reporte pendente."""

    def setUp(self):
        super().setUp()
        self.admin = User.objects.create_user(email='admin@example.com', password='test123', role='admin')
        self.supervisor = User.objects.create_user(email='supervisor@example.com', password='test123', role='supervisor')
        self.tech_user = User.objects.create_user(email='tecnico@example.com', password='test123', role='technician')
        self.other_tech_user = User.objects.create_user(email='tecnico2@example.com', password='test123', role='technician')
        self.operator = User.objects.create_user(email='operador@example.com', password='test123', role='operator')

        mechanic = EmployeeType.objects.create(name='Mecânico')
        self.employee = Employee.objects.create(
            first_name='Carlos',
            last_name='Souza',
            employee_type=mechanic,
            user=self.tech_user
        )
        self.other_employee = Employee.objects.create(
            first_name='Ana',
            last_name='Lima',
            employee_type=mechanic,
            user=self.other_tech_user
        )

        self.vehicle = Vehicle.objects.create(
            brand='Ford',
            model='Cargo',
            year=2019,
            plate='XYZ1A23',
            mileage=120000
        )
        self.report = Report.objects.create(
            vehicle=self.vehicle,
            reported_by=self.operator,
            description='Ruído ao frear'
        )

    def diagnostic_fields(self, **overrides):
        data = {
            'diagnosis': 'Pastilhas gastas',
            'recommendations': 'Trocar pastilhas dianteiras',
            'estimated_cost': Decimal('450.00'),
            'severity': 'high',
        }
        data.update(overrides)
        return data

    def assigned_report(self):
        return services.assign_report(self.report.pk, self.employee.pk, self.supervisor)

    def diagnosed_report(self):
        self.assigned_report()
        return services.create_diagnostic(self.report.pk, self.employee.pk, self.diagnostic_fields(), self.tech_user)

    def approved_work_order(self):
        diagnostic = self.diagnosed_report()
        work_order, _ = services.approve_diagnostic(diagnostic.pk, self.supervisor)
        return work_order

    def awaiting_validation_work_order(self):
        work_order = self.approved_work_order()
        services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        return services.advance_work_order(work_order.pk, WorkOrderStatus.COMPLETED, self.tech_user)


class TransitionTableTest(TestCase):
    def test_tables_cover_every_status(self):
        self.assertEqual(set(REPORT_TRANSITIONS), set(ReportStatus))
        self.assertEqual(set(WORK_ORDER_TRANSITIONS), set(WorkOrderStatus))

    def test_targets_are_known_statuses(self):
        for targets in REPORT_TRANSITIONS.values():
            self.assertTrue(targets <= set(ReportStatus))
        for targets in WORK_ORDER_TRANSITIONS.values():
            self.assertTrue(targets <= set(WorkOrderStatus))
        self.assertTrue(WORK_ORDER_REOPENABLE <= set(WorkOrderStatus))

    def test_validated_is_terminal_for_advance(self):
        self.assertEqual(WORK_ORDER_TRANSITIONS[WorkOrderStatus.VALIDATED], frozenset())


class AssignReportTest(FleetFixtureMixin, TestCase):
    def test_assign_moves_pending_to_diagnostico(self):
        report = self.assigned_report()
        report.refresh_from_db()
        self.assertEqual(report.status, ReportStatus.DIAGNOSTICO)
        self.assertEqual(report.assigned_to_employee, self.employee)
        self.assertIsNotNone(report.assigned_at)

    def test_reassign_same_employee_is_noop(self):
        first = self.assigned_report()
        second = self.assigned_report()
        self.assertEqual(second.assigned_at, first.assigned_at)
        self.assertEqual(second.status, ReportStatus.DIAGNOSTICO)

    def test_reassign_other_employee_without_diagnostic(self):
        self.assigned_report()
        report = services.assign_report(self.report.pk, self.other_employee.pk, self.supervisor)
        self.assertEqual(report.assigned_to_employee, self.other_employee)

    def test_reassign_other_employee_with_diagnostic_fails(self):
        self.diagnosed_report()
        with self.assertRaises(InvalidTransition):
            services.assign_report(self.report.pk, self.other_employee.pk, self.supervisor)
        self.report.refresh_from_db()
        self.assertEqual(self.report.assigned_to_employee, self.employee)

    def test_assign_requires_supervisor(self):
        with self.assertRaises(Forbidden):
            services.assign_report(self.report.pk, self.employee.pk, self.tech_user)

    def test_assign_unknown_employee(self):
        with self.assertRaises(NotFound):
            services.assign_report(self.report.pk, '00000000-0000-0000-0000-000000000000', self.supervisor)
        with self.assertRaises(NotFound):
            services.assign_report('nao-e-uuid', self.employee.pk, self.supervisor)

    def test_assign_inactive_employee(self):
        self.employee.is_active = False
        self.employee.save()
        with self.assertRaises(ValidationError):
            self.assigned_report()

    def test_reassign_same_employee_after_deactivation_is_noop(self):
        first = self.assigned_report()
        self.employee.is_active = False
        self.employee.save()

        second = self.assigned_report()
        self.assertEqual(second.status, ReportStatus.DIAGNOSTICO)
        self.assertEqual(second.assigned_to_employee_id, self.employee.pk)
        self.assertEqual(second.assigned_at, first.assigned_at)

    def test_assign_after_approval_fails(self):
        self.approved_work_order()
        with self.assertRaises(InvalidTransition):
            self.assigned_report()


class DiagnosticTest(FleetFixtureMixin, TestCase):
    def test_create_keeps_report_in_diagnostico(self):
        diagnostic = self.diagnosed_report()
        self.report.refresh_from_db()
        self.assertEqual(self.report.status, ReportStatus.DIAGNOSTICO)
        self.assertEqual(diagnostic.employee, self.employee)
        self.assertIsNone(diagnostic.approved_at)

    def test_create_requires_diagnostico(self):
        with self.assertRaises(InvalidTransition):
            services.create_diagnostic(self.report.pk, self.employee.pk, self.diagnostic_fields(), self.tech_user)

    def test_only_one_open_diagnostic(self):
        self.diagnosed_report()
        with self.assertRaises(InvalidTransition):
            services.create_diagnostic(self.report.pk, self.employee.pk, self.diagnostic_fields(), self.tech_user)
        self.assertEqual(Diagnostic.objects.filter(report=self.report).count(), 1)

    def test_create_by_other_technician_is_forbidden(self):
        self.assigned_report()
        with self.assertRaises(Forbidden):
            services.create_diagnostic(self.report.pk, self.employee.pk, self.diagnostic_fields(), self.other_tech_user)
        with self.assertRaises(Forbidden):
            services.create_diagnostic(self.report.pk, self.other_employee.pk, self.diagnostic_fields(), self.other_tech_user)

    def test_admin_can_diagnose_on_behalf(self):
        self.assigned_report()
        diagnostic = services.create_diagnostic(self.report.pk, self.employee.pk, self.diagnostic_fields(), self.admin)
        self.assertEqual(diagnostic.employee, self.employee)

    def test_admin_can_diagnose_for_unassigned_employee(self):
        self.assigned_report()
        diagnostic = services.create_diagnostic(
            self.report.pk, self.other_employee.pk, self.diagnostic_fields(), self.admin
        )
        self.assertEqual(diagnostic.employee, self.other_employee)
        self.report.refresh_from_db()
        self.assertEqual(self.report.status, ReportStatus.DIAGNOSTICO)

    def test_invalid_fields(self):
        self.assigned_report()
        with self.assertRaises(ValidationError) as ctx:
            services.create_diagnostic(
                self.report.pk, self.employee.pk, self.diagnostic_fields(severity='extreme'), self.tech_user
            )
        self.assertIn('severity', ctx.exception.errors)

        with self.assertRaises(ValidationError):
            services.create_diagnostic(
                self.report.pk, self.employee.pk, self.diagnostic_fields(approved_at='2025-01-01'), self.tech_user
            )
        self.assertFalse(Diagnostic.objects.exists())

    def test_update_open_diagnostic(self):
        diagnostic = self.diagnosed_report()
        updated = services.update_diagnostic(diagnostic.pk, {'estimated_cost': Decimal('500.00')}, self.tech_user)
        self.assertEqual(updated.estimated_cost, Decimal('500.00'))

    def test_approved_diagnostic_is_immutable(self):
        work_order = self.approved_work_order()
        with self.assertRaises(InvalidTransition):
            services.update_diagnostic(work_order.diagnostic_id, {'diagnosis': 'Outro'}, self.admin)


class ApproveDiagnosticTest(FleetFixtureMixin, TestCase):
    def test_approve_creates_work_order(self):
        diagnostic = self.diagnosed_report()
        work_order, report = services.approve_diagnostic(diagnostic.pk, self.supervisor)

        diagnostic.refresh_from_db()
        self.assertEqual(diagnostic.approved_by, self.supervisor)
        self.assertIsNotNone(diagnostic.approved_at)
        self.assertEqual(report.status, ReportStatus.IN_PROGRESS)
        self.assertEqual(work_order.status, WorkOrderStatus.PENDING)
        self.assertEqual(work_order.vehicle, self.vehicle)
        self.assertEqual(work_order.assigned_to_employee, self.employee)
        self.assertEqual(work_order.estimated_cost, Decimal('450.00'))
        self.assertEqual(work_order.priority, Priority.HIGH)
        self.assertTrue(work_order.code.startswith('OT-'))

    def test_approve_twice_fails(self):
        diagnostic = self.diagnosed_report()
        services.approve_diagnostic(diagnostic.pk, self.supervisor)
        with self.assertRaises(InvalidTransition):
            services.approve_diagnostic(diagnostic.pk, self.supervisor)
        self.assertEqual(WorkOrder.objects.filter(diagnostic=diagnostic).count(), 1)

    def test_approve_requires_supervisor(self):
        diagnostic = self.diagnosed_report()
        with self.assertRaises(Forbidden):
            services.approve_diagnostic(diagnostic.pk, self.tech_user)
        self.assertFalse(WorkOrder.objects.exists())


class RejectReportTest(FleetFixtureMixin, TestCase):
    def test_reject_returns_report_to_pending(self):
        self.diagnosed_report()
        report = services.reject_report(self.report.pk, self.tech_user)

        self.assertEqual(report.status, ReportStatus.PENDING)
        self.assertIsNone(report.assigned_to_employee)
        self.assertFalse(Diagnostic.objects.filter(report=self.report).exists())

        # Pode ser atribuído e diagnosticado de novo
        services.assign_report(self.report.pk, self.other_employee.pk, self.supervisor)
        services.create_diagnostic(
            self.report.pk, self.other_employee.pk, self.diagnostic_fields(), self.other_tech_user
        )

    def test_reject_by_unrelated_user_is_forbidden(self):
        self.diagnosed_report()
        with self.assertRaises(Forbidden):
            services.reject_report(self.report.pk, self.other_tech_user)

    def test_reject_outside_diagnostico(self):
        with self.assertRaises(InvalidTransition):
            services.reject_report(self.report.pk, self.admin)


class AdvanceWorkOrderTest(FleetFixtureMixin, TestCase):
    def test_skips_are_rejected(self):
        work_order = self.approved_work_order()
        for target in (
            WorkOrderStatus.AWAITING_VALIDATION,
            WorkOrderStatus.COMPLETED,
            WorkOrderStatus.PENDING,
        ):
            with self.assertRaises(InvalidTransition):
                services.advance_work_order(work_order.pk, target, self.tech_user)
        work_order.refresh_from_db()
        self.assertEqual(work_order.status, WorkOrderStatus.PENDING)

    def test_unknown_status(self):
        work_order = self.approved_work_order()
        with self.assertRaises(ValidationError):
            services.advance_work_order(work_order.pk, 'finished', self.tech_user)

    def test_in_progress_sets_vehicle_in_service(self):
        work_order = self.approved_work_order()
        work_order = services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        self.assertIsNotNone(work_order.start_date)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, VehicleStatus.IN_SERVICE)

    def test_repeating_current_status_fails(self):
        work_order = self.approved_work_order()
        services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        with self.assertRaises(InvalidTransition):
            services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)

    def test_completed_goes_to_awaiting_validation(self):
        work_order = self.awaiting_validation_work_order()
        self.assertEqual(work_order.status, WorkOrderStatus.AWAITING_VALIDATION)
        self.assertIsNotNone(work_order.completed_date)

        history = list(
            WorkOrderHistory.objects.filter(work_order=work_order)
            .order_by('created_at')
            .values_list('previous_status', 'new_status')
        )
        self.assertIn((WorkOrderStatus.IN_PROGRESS, WorkOrderStatus.COMPLETED), history)
        self.assertIn((WorkOrderStatus.COMPLETED, WorkOrderStatus.AWAITING_VALIDATION), history)

    def test_validation_requires_admin(self):
        work_order = self.awaiting_validation_work_order()
        with self.assertRaises(Forbidden):
            services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.supervisor)
        work_order.refresh_from_db()
        self.assertEqual(work_order.status, WorkOrderStatus.AWAITING_VALIDATION)

    def test_validation_resolves_report_and_releases_vehicle(self):
        work_order = self.awaiting_validation_work_order()
        work_order = services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)

        self.assertEqual(work_order.validated_by, self.admin)
        self.assertIsNotNone(work_order.validated_at)
        self.report.refresh_from_db()
        self.assertEqual(self.report.status, ReportStatus.RESOLVED)
        self.assertIsNotNone(self.report.resolved_at)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, VehicleStatus.ACTIVE)

    def test_vehicle_stays_in_service_with_other_open_work_orders(self):
        work_order = self.awaiting_validation_work_order()

        second_report = Report.objects.create(vehicle=self.vehicle, description='Luz do painel acesa')
        services.assign_report(second_report.pk, self.employee.pk, self.supervisor)
        diagnostic = services.create_diagnostic(
            second_report.pk, self.employee.pk, self.diagnostic_fields(), self.tech_user
        )
        second_wo, _ = services.approve_diagnostic(diagnostic.pk, self.supervisor)
        services.advance_work_order(second_wo.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)

        services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, VehicleStatus.IN_SERVICE)

    def test_validated_is_frozen(self):
        work_order = self.awaiting_validation_work_order()
        work_order = services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)
        with self.assertRaises(InvalidTransition):
            services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)
        with self.assertRaises(InvalidTransition):
            services.ensure_work_order_editable(work_order)

    def test_full_lifecycle_scenario(self):
        report = services.assign_report(self.report.pk, self.employee.pk, self.supervisor)
        self.assertEqual(report.status, ReportStatus.DIAGNOSTICO)

        diagnostic = services.create_diagnostic(
            self.report.pk, self.employee.pk, self.diagnostic_fields(), self.tech_user
        )
        self.report.refresh_from_db()
        self.assertEqual(self.report.status, ReportStatus.DIAGNOSTICO)

        work_order, report = services.approve_diagnostic(diagnostic.pk, self.supervisor)
        self.assertEqual(report.status, ReportStatus.IN_PROGRESS)
        self.assertEqual(work_order.status, WorkOrderStatus.PENDING)

        work_order = services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        self.assertEqual(work_order.status, WorkOrderStatus.IN_PROGRESS)

        work_order = services.advance_work_order(work_order.pk, WorkOrderStatus.COMPLETED, self.tech_user)
        self.assertEqual(work_order.status, WorkOrderStatus.AWAITING_VALIDATION)

        work_order = services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)
        self.assertEqual(work_order.status, WorkOrderStatus.VALIDATED)

        self.report.refresh_from_db()
        self.vehicle.refresh_from_db()
        self.assertEqual(self.report.status, ReportStatus.RESOLVED)
        self.assertEqual(self.vehicle.status, VehicleStatus.ACTIVE)
        self.assertTrue(Notification.objects.exists())


class ReopenWorkOrderTest(FleetFixtureMixin, TestCase):
    def test_reopen_validated_reverts_report_and_vehicle(self):
        work_order = self.awaiting_validation_work_order()
        services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)

        work_order = services.reopen_work_order(work_order.pk, self.admin, note='Ruído voltou')

        self.assertEqual(work_order.status, WorkOrderStatus.IN_PROGRESS)
        self.assertIsNone(work_order.validated_at)
        self.report.refresh_from_db()
        self.assertEqual(self.report.status, ReportStatus.IN_PROGRESS)
        self.assertIsNone(self.report.resolved_at)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, VehicleStatus.IN_SERVICE)

    def test_reopen_awaiting_validation(self):
        work_order = self.awaiting_validation_work_order()
        work_order = services.reopen_work_order(work_order.pk, self.admin)
        self.assertEqual(work_order.status, WorkOrderStatus.IN_PROGRESS)

    def test_reopen_rules(self):
        work_order = self.approved_work_order()
        with self.assertRaises(InvalidTransition):
            services.reopen_work_order(work_order.pk, self.admin)

        work_order = self.awaiting_validation_work_order_for(work_order)
        with self.assertRaises(Forbidden):
            services.reopen_work_order(work_order.pk, self.supervisor)

    def awaiting_validation_work_order_for(self, work_order):
        services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        return services.advance_work_order(work_order.pk, WorkOrderStatus.COMPLETED, self.tech_user)


class LockOrderTest(FleetFixtureMixin, TestCase):
    """Toda ação trava o reporte antes de diagnóstico ou OT."""

    def locked_models(self, action, *args):
        original = services._lock
        order = []

        def recording_lock(model, pk, label):
            order.append(model)
            return original(model, pk, label)

        with mock.patch('lifecycle.services._lock', side_effect=recording_lock):
            action(*args)
        return order

    def assertReportFirst(self, order, child):
        self.assertIn(child, order)
        self.assertLess(order.index(Report), order.index(child))

    def test_approve_diagnostic_locks_report_first(self):
        diagnostic = self.diagnosed_report()
        order = self.locked_models(services.approve_diagnostic, diagnostic.pk, self.supervisor)
        self.assertReportFirst(order, Diagnostic)

    def test_advance_locks_report_first(self):
        work_order = self.approved_work_order()
        order = self.locked_models(
            services.advance_work_order, work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user
        )
        self.assertReportFirst(order, WorkOrder)

    def test_validate_and_reopen_lock_report_first(self):
        work_order = self.awaiting_validation_work_order()
        order = self.locked_models(
            services.advance_work_order, work_order.pk, WorkOrderStatus.VALIDATED, self.admin
        )
        self.assertReportFirst(order, WorkOrder)

        order = self.locked_models(services.reopen_work_order, work_order.pk, self.admin)
        self.assertReportFirst(order, WorkOrder)


class ClearReportsTest(FleetFixtureMixin, TestCase):
    def _populate(self):
        work_order = self.approved_work_order()
        services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        WorkOrderTask.objects.create(work_order=work_order, title='Desmontar roda')
        Report.objects.create(vehicle=self.vehicle, description='Pneu furado')
        return work_order

    def test_clear_removes_everything_and_releases_vehicles(self):
        self._populate()
        counts = services.clear_reports(self.admin)

        self.assertEqual(counts['work_orders'], 1)
        self.assertEqual(counts['diagnostics'], 1)
        self.assertEqual(counts['reports'], 2)
        self.assertEqual(counts['vehicles_reset'], 1)
        self.assertFalse(Report.objects.exists())
        self.assertFalse(Diagnostic.objects.exists())
        self.assertFalse(WorkOrder.objects.exists())
        self.assertFalse(WorkOrderTask.objects.exists())
        self.assertFalse(WorkOrderHistory.objects.exists())
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, VehicleStatus.ACTIVE)

    def test_clear_requires_admin(self):
        self._populate()
        with self.assertRaises(Forbidden):
            services.clear_reports(self.supervisor)
        self.assertEqual(Report.objects.count(), 2)

    def test_failure_rolls_everything_back(self):
        self._populate()
        with mock.patch('lifecycle.services._release_vehicles', side_effect=DatabaseError('disk full')):
            with self.assertRaises(StorageFailure):
                services.clear_reports(self.admin)

        self.assertEqual(Report.objects.count(), 2)
        self.assertEqual(Diagnostic.objects.count(), 1)
        self.assertEqual(WorkOrder.objects.count(), 1)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, VehicleStatus.IN_SERVICE)


class StorageFailureTest(FleetFixtureMixin, TestCase):
    def test_database_error_during_approval_leaves_state_intact(self):
        diagnostic = self.diagnosed_report()
        with mock.patch('lifecycle.services.notify', side_effect=DatabaseError('connection lost')):
            with self.assertRaises(StorageFailure):
                services.approve_diagnostic(diagnostic.pk, self.supervisor)

        diagnostic.refresh_from_db()
        self.report.refresh_from_db()
        self.assertIsNone(diagnostic.approved_at)
        self.assertEqual(self.report.status, ReportStatus.DIAGNOSTICO)
        self.assertFalse(WorkOrder.objects.exists())


class ApproveMaterialTest(FleetFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.item = InventoryItem.objects.create(
            name='Pastilha dianteira',
            quantity=4,
            min_quantity=1,
            unit_price=Decimal('80.00')
        )
        self.work_order = self.approved_work_order()

    def test_approval_draws_stock(self):
        material = WorkOrderMaterial.objects.create(
            work_order=self.work_order,
            description='Jogo de pastilhas',
            inventory_item=self.item,
            quantity=2
        )
        material = approve_material(material, self.supervisor)

        self.item.refresh_from_db()
        self.assertEqual(self.item.quantity, 2)
        self.assertEqual(material.unit_cost, Decimal('80.00'))
        self.assertEqual(material.approved_by, self.supervisor)
        movement = self.item.movements.get()
        self.assertIn(self.work_order.code, movement.reference)

    def test_insufficient_stock_rejects_approval(self):
        material = WorkOrderMaterial.objects.create(
            work_order=self.work_order,
            description='Jogo de pastilhas',
            inventory_item=self.item,
            quantity=10
        )
        with self.assertRaises(ValidationError):
            approve_material(material, self.supervisor)
        material.refresh_from_db()
        self.assertIsNone(material.approved_at)

    def test_approval_rules(self):
        material = WorkOrderMaterial.objects.create(
            work_order=self.work_order,
            description='Fluido de freio'
        )
        with self.assertRaises(Forbidden):
            approve_material(material, self.tech_user)
        approve_material(material, self.supervisor)
        with self.assertRaises(InvalidTransition):
            approve_material(material, self.supervisor)
