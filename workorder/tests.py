from decimal import Decimal

from django.test import TestCase

from lifecycle.tests import FleetFixtureMixin
from workorder.models import WorkOrderMaterial, WorkOrderStatus, WorkOrderTask


class WorkOrderModelTests(FleetFixtureMixin, TestCase):
    def test_code_is_generated_once(self):
        work_order = self.approved_work_order()
        self.assertTrue(work_order.code.startswith('OT-'))
        self.assertIn(work_order.id.hex[:6].upper(), work_order.code)

        code = work_order.code
        work_order.notes = 'Atualizada'
        work_order.save()
        work_order.refresh_from_db()
        self.assertEqual(work_order.code, code)

    def test_is_open_until_validated(self):
        work_order = self.approved_work_order()
        self.assertTrue(work_order.is_open)
        work_order.status = WorkOrderStatus.VALIDATED
        self.assertFalse(work_order.is_open)

    def test_priority_follows_severity(self):
        work_order = self.approved_work_order()
        self.assertEqual(work_order.priority, 'high')
        self.assertEqual(work_order.vehicle, self.vehicle)
        self.assertEqual(work_order.assigned_to_employee, self.employee)


class WorkOrderTaskTests(FleetFixtureMixin, TestCase):
    def test_done_at_tracks_is_done(self):
        work_order = self.approved_work_order()
        task = WorkOrderTask.objects.create(work_order=work_order, title='Trocar pastilhas')
        self.assertIsNone(task.done_at)

        task.is_done = True
        task.save()
        self.assertIsNotNone(task.done_at)

        task.is_done = False
        task.save()
        self.assertIsNone(task.done_at)


class WorkOrderMaterialTests(FleetFixtureMixin, TestCase):
    def test_total_cost(self):
        work_order = self.approved_work_order()
        material = WorkOrderMaterial.objects.create(
            work_order=work_order,
            description='Pastilha dianteira',
            quantity=2,
            unit_cost=Decimal('85.50')
        )
        self.assertEqual(material.total_cost, Decimal('171.00'))

    def test_total_cost_without_unit_cost(self):
        work_order = self.approved_work_order()
        material = WorkOrderMaterial.objects.create(work_order=work_order, description='Fluido de freio')
        self.assertIsNone(material.total_cost)
