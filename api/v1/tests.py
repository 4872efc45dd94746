from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from clients.models import Client, ClientBranch
from diagnostics.models import Diagnostic
from inventory.models import InventoryItem
from lifecycle import services
from lifecycle.tests import FleetFixtureMixin
from maintenance.models import Frequency, ScheduledMaintenance, ServiceCategory
from notifications.models import Notification
from reports.models import Report, ReportStatus
from vehicles.models import VehicleStatus
from workorder.models import WorkOrder, WorkOrderStatus, WorkOrderTask


class ApiTestCase(FleetFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.api = APIClient()

    def as_user(self, user):
        self.api.force_authenticate(user=user)
        return self.api


class AuthApiTest(ApiTestCase):
    def test_requires_authentication(self):
        response = self.api.get('/api/v1/reports/')
        self.assertIn(response.status_code, (401, 403))

    def test_login_and_me(self):
        response = self.api.post(
            '/api/v1/auth/login/',
            {'email': 'admin@example.com', 'password': 'test123'},
            format='json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'admin')

        me = self.api.get('/api/v1/users/me/')
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data['email'], 'admin@example.com')

        logout = self.api.post('/api/v1/auth/logout/')
        self.assertEqual(logout.status_code, 204)

    def test_login_with_wrong_password(self):
        response = self.api.post(
            '/api/v1/auth/login/',
            {'email': 'admin@example.com', 'password': 'errada'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'invalid_credentials')

    def test_only_admin_creates_users(self):
        payload = {
            'email': 'novo@example.com',
            'role': 'technician',
            'password': 'senha-forte-123',
            'password_confirm': 'senha-forte-123',
        }
        response = self.as_user(self.supervisor).post('/api/v1/users/', payload, format='json')
        self.assertEqual(response.status_code, 403)

        response = self.as_user(self.admin).post('/api/v1/users/', payload, format='json')
        self.assertEqual(response.status_code, 201)


class ReportApiTest(ApiTestCase):
    def test_create_report_sets_reporter_and_pending(self):
        response = self.as_user(self.operator).post(
            '/api/v1/reports/',
            {
                'vehicle': str(self.vehicle.pk),
                'description': 'Motor falhando',
                'images': [{'url': 'https://example.com/foto.jpg'}],
                'status': 'resolved',
            },
            format='json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['status'], ReportStatus.PENDING)
        self.assertEqual(response.data['reported_by'], self.operator.pk)
        self.assertEqual(response.data['images'][0]['description'], '')

    def test_reports_have_no_delete(self):
        response = self.as_user(self.admin).delete(f'/api/v1/reports/{self.report.pk}/')
        self.assertEqual(response.status_code, 405)

    def test_operator_sees_only_own_reports(self):
        Report.objects.create(vehicle=self.vehicle, reported_by=self.supervisor, description='Outro')
        response = self.as_user(self.operator).get('/api/v1/reports/')
        self.assertEqual(response.status_code, 200)
        ids = [item['id'] for item in response.data]
        self.assertEqual(ids, [str(self.report.pk)])

    def test_assign_endpoint(self):
        response = self.as_user(self.supervisor).post(
            f'/api/v1/reports/{self.report.pk}/assign/',
            {'employee_id': str(self.employee.pk)},
            format='json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], ReportStatus.DIAGNOSTICO)
        self.assertEqual(response.data['assigned_to_employee'], self.employee.pk)

    def test_assign_error_mapping(self):
        response = self.as_user(self.tech_user).post(
            f'/api/v1/reports/{self.report.pk}/assign/',
            {'employee_id': str(self.employee.pk)},
            format='json'
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['error'], 'forbidden')

        response = self.as_user(self.supervisor).post(
            f'/api/v1/reports/{self.report.pk}/assign/',
            {'employee_id': '00000000-0000-0000-0000-000000000000'},
            format='json'
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['error'], 'not_found')

        self.diagnosed_report()
        response = self.as_user(self.supervisor).post(
            f'/api/v1/reports/{self.report.pk}/assign/',
            {'employee_id': str(self.other_employee.pk)},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'invalid_transition')
        self.assertEqual(response.data['current_status'], ReportStatus.DIAGNOSTICO)

    def test_reject_endpoint(self):
        self.diagnosed_report()
        response = self.as_user(self.tech_user).post(f'/api/v1/reports/{self.report.pk}/reject/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], ReportStatus.PENDING)

    def test_clear_endpoint(self):
        self.approved_work_order()
        response = self.as_user(self.supervisor).post('/api/v1/reports/clear/')
        self.assertEqual(response.status_code, 403)

        response = self.as_user(self.admin).post('/api/v1/reports/clear/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['reports'], 1)
        self.assertEqual(response.data['work_orders'], 1)
        self.assertFalse(Report.objects.exists())


class DiagnosticApiTest(ApiTestCase):
    def test_create_and_approve(self):
        self.assigned_report()
        payload = {
            'report_id': str(self.report.pk),
            'employee_id': str(self.employee.pk),
            'diagnosis': 'Bateria descarregada',
            'severity': 'low',
            'estimated_cost': '320.00',
        }
        response = self.as_user(self.tech_user).post('/api/v1/diagnostics/', payload, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.data['work_order'])
        diagnostic_id = response.data['id']

        response = self.as_user(self.supervisor).post(f'/api/v1/diagnostics/{diagnostic_id}/approve/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['report']['status'], ReportStatus.IN_PROGRESS)
        self.assertEqual(response.data['work_order']['status'], WorkOrderStatus.PENDING)
        self.assertEqual(Decimal(response.data['work_order']['estimated_cost']), Decimal('320.00'))

        response = self.as_user(self.supervisor).post(f'/api/v1/diagnostics/{diagnostic_id}/approve/')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(WorkOrder.objects.count(), 1)

    def test_create_with_invalid_severity(self):
        self.assigned_report()
        response = self.as_user(self.tech_user).post(
            '/api/v1/diagnostics/',
            {
                'report_id': str(self.report.pk),
                'employee_id': str(self.employee.pk),
                'diagnosis': 'X',
                'severity': 'extreme',
            },
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Diagnostic.objects.exists())

    def test_update_approved_diagnostic_fails(self):
        work_order = self.approved_work_order()
        response = self.as_user(self.admin).patch(
            f'/api/v1/diagnostics/{work_order.diagnostic_id}/',
            {'diagnosis': 'Alterado'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'invalid_transition')


class WorkOrderApiTest(ApiTestCase):
    def test_no_create_or_delete(self):
        work_order = self.approved_work_order()
        client = self.as_user(self.admin)
        self.assertEqual(client.post('/api/v1/work-orders/', {}, format='json').status_code, 405)
        self.assertEqual(client.delete(f'/api/v1/work-orders/{work_order.pk}/').status_code, 405)

    def test_advance_through_validation(self):
        work_order = self.approved_work_order()
        url = f'/api/v1/work-orders/{work_order.pk}/advance/'

        response = self.as_user(self.tech_user).post(url, {'target_status': 'completed'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'invalid_transition')

        response = self.as_user(self.tech_user).post(url, {'target_status': 'in_progress'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['vehicle_status'], VehicleStatus.IN_SERVICE)

        response = self.as_user(self.tech_user).post(url, {'target_status': 'completed', 'note': 'Pronto'}, format='json')
        self.assertEqual(response.data['status'], WorkOrderStatus.AWAITING_VALIDATION)

        response = self.as_user(self.tech_user).post(url, {'target_status': 'validated'}, format='json')
        self.assertEqual(response.status_code, 403)

        response = self.as_user(self.admin).post(url, {'target_status': 'validated'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], WorkOrderStatus.VALIDATED)
        self.assertEqual(response.data['report_status'], ReportStatus.RESOLVED)
        self.assertEqual(response.data['vehicle_status'], VehicleStatus.ACTIVE)

        history = self.as_user(self.admin).get(f'/api/v1/work-orders/{work_order.pk}/history/')
        self.assertEqual(
            [entry['new_status'] for entry in history.data],
            ['pending', 'in_progress', 'completed', 'awaiting_validation', 'validated'],
        )

    def test_unknown_target_status(self):
        work_order = self.approved_work_order()
        response = self.as_user(self.tech_user).post(
            f'/api/v1/work-orders/{work_order.pk}/advance/',
            {'target_status': 'done'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'validation_error')

    def test_reopen_endpoint(self):
        work_order = self.awaiting_validation_work_order()
        url = f'/api/v1/work-orders/{work_order.pk}/reopen/'
        self.assertEqual(self.as_user(self.supervisor).post(url).status_code, 403)

        response = self.as_user(self.admin).post(url, {'note': 'Refazer'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], WorkOrderStatus.IN_PROGRESS)

    def test_status_is_read_only_and_validated_is_frozen(self):
        work_order = self.awaiting_validation_work_order()
        url = f'/api/v1/work-orders/{work_order.pk}/'

        response = self.as_user(self.admin).patch(url, {'status': 'validated', 'actual_cost': '500.00'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], WorkOrderStatus.AWAITING_VALIDATION)

        services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)
        response = self.as_user(self.admin).patch(url, {'notes': 'Depois'}, format='json')
        self.assertEqual(response.status_code, 400)

        response = self.as_user(self.admin).post(
            '/api/v1/work-order-tasks/',
            {'work_order': str(work_order.pk), 'title': 'Nova tarefa'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(WorkOrderTask.objects.exists())

    def test_material_approval_endpoint(self):
        work_order = self.approved_work_order()
        item = InventoryItem.objects.create(name='Óleo 15W40', quantity=10, min_quantity=2)
        response = self.as_user(self.tech_user).post(
            '/api/v1/work-order-materials/',
            {'work_order': str(work_order.pk), 'description': 'Óleo', 'inventory_item': str(item.pk), 'quantity': 4},
            format='json'
        )
        self.assertEqual(response.status_code, 201)

        response = self.as_user(self.supervisor).post(f"/api/v1/work-order-materials/{response.data['id']}/approve/")
        self.assertEqual(response.status_code, 200)
        item.refresh_from_db()
        self.assertEqual(item.quantity, 6)


class CatalogApiTest(ApiTestCase):
    def test_vehicle_status_rules(self):
        url = f'/api/v1/vehicles/{self.vehicle.pk}/'
        response = self.as_user(self.supervisor).patch(url, {'status': 'in-service'}, format='json')
        self.assertEqual(response.status_code, 400)

        work_order = self.approved_work_order()
        services.advance_work_order(work_order.pk, WorkOrderStatus.IN_PROGRESS, self.tech_user)
        response = self.as_user(self.supervisor).patch(url, {'status': 'inactive'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_vehicle_with_reports_is_protected(self):
        response = self.as_user(self.admin).delete(f'/api/v1/vehicles/{self.vehicle.pk}/')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'protected')

    def test_vehicle_transfer_and_history(self):
        client = Client.objects.create(name='Transportes Sul', phone='5133330000', email='sul@example.com', address='Av. Brasil, 100')
        matriz = ClientBranch.objects.create(client=client, name='Matriz', address='Av. Brasil, 100')
        filial = ClientBranch.objects.create(client=client, name='Filial', address='Rua Canoas, 5')
        self.vehicle.client = client
        self.vehicle.branch = matriz
        self.vehicle.save()
        url = f'/api/v1/vehicles/{self.vehicle.pk}/'

        # Troca direta de sucursal não é aceita
        response = self.as_user(self.supervisor).patch(url, {'branch': str(filial.pk)}, format='json')
        self.assertEqual(response.status_code, 400)

        response = self.as_user(self.operator).post(f'{url}transfer/', {'to_branch_id': str(filial.pk), 'reason': 'Rota nova'}, format='json')
        self.assertEqual(response.status_code, 403)

        response = self.as_user(self.supervisor).post(f'{url}transfer/', {'to_branch_id': str(filial.pk)}, format='json')
        self.assertEqual(response.status_code, 400)

        response = self.as_user(self.supervisor).post(f'{url}transfer/', {'to_branch_id': str(filial.pk), 'reason': 'Rota nova'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['branch'], filial.pk)

        response = self.as_user(self.operator).get(f'{url}transfer-history/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['from_branch_name'], 'Matriz')
        self.assertEqual(response.data[0]['to_branch_name'], 'Filial')
        self.assertEqual(response.data[0]['transferred_by_email'], 'supervisor@example.com')

    def test_catalog_writes_require_supervisor(self):
        response = self.as_user(self.tech_user).post('/api/v1/vehicle-types/', {'name': 'Van', 'description': 'Carga leve'}, format='json')
        self.assertEqual(response.status_code, 403)
        response = self.as_user(self.supervisor).post('/api/v1/vehicle-types/', {'name': 'Van', 'description': 'Carga leve'}, format='json')
        self.assertEqual(response.status_code, 201)

    def test_inventory_movement_endpoint(self):
        item = InventoryItem.objects.create(name='Filtro de ar', quantity=1, min_quantity=0)
        response = self.as_user(self.supervisor).post(
            '/api/v1/inventory-movements/',
            {'item': str(item.pk), 'movement_type': 'out', 'quantity': 5},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'validation_error')

        response = self.as_user(self.supervisor).post(
            '/api/v1/inventory-movements/',
            {'item': str(item.pk), 'movement_type': 'in', 'quantity': 5, 'reference': 'NF 77'},
            format='json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['balance_after'], 6)

    def test_scheduled_maintenance_complete(self):
        category = ServiceCategory.objects.create(name='Freios')
        plan = ScheduledMaintenance.objects.create(
            vehicle=self.vehicle,
            category=category,
            title='Revisão de freios',
            description='Pastilhas e discos',
            frequency=Frequency.QUARTERLY,
            next_due_date=timezone.localdate() + timedelta(days=1)
        )
        response = self.as_user(self.supervisor).post(
            f'/api/v1/scheduled-maintenance/{plan.pk}/complete/',
            {'mileage': 125000},
            format='json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNotNone(response.data['last_completed_at'])
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.mileage, 125000)


class NotificationApiTest(ApiTestCase):
    def test_read_and_read_all(self):
        self.assigned_report()
        self.assertTrue(Notification.objects.filter(read=False).exists())
        notification = Notification.objects.first()

        response = self.as_user(self.operator).post(f'/api/v1/notifications/{notification.pk}/read/')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['read'])

        response = self.as_user(self.operator).post('/api/v1/notifications/read-all/')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Notification.objects.filter(read=False).exists())


class DashboardApiTest(ApiTestCase):
    def test_overview(self):
        self.approved_work_order()
        InventoryItem.objects.create(name='Correia', quantity=1, min_quantity=2)

        response = self.as_user(self.operator).get('/api/dashboard/overview/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['reports'][ReportStatus.IN_PROGRESS], 1)
        self.assertEqual(response.data['work_orders'][WorkOrderStatus.PENDING], 1)
        self.assertEqual(response.data['vehicles'][VehicleStatus.ACTIVE], 1)
        self.assertEqual(response.data['low_stock_items'], 1)
        self.assertEqual(len(response.data['reports_per_month']), 6)
        self.assertEqual(response.data['reports_per_month'][-1]['total'], 1)
        self.assertEqual(response.data['costs']['estimated'], Decimal('450.00'))
