from datetime import date, timedelta
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from lifecycle.exceptions import InvalidTransition
from vehicles.models import Vehicle
from .models import (
    Frequency,
    MaintenanceStatus,
    ScheduledMaintenance,
    ServiceCategory,
    add_months,
    next_occurrence,
)


class FrequencyArithmeticTest(TestCase):
    def test_add_months_clamps_to_last_day(self):
        self.assertEqual(add_months(date(2025, 1, 31), 1), date(2025, 2, 28))
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(add_months(date(2025, 11, 30), 3), date(2026, 2, 28))

    def test_next_occurrence_per_frequency(self):
        base = date(2025, 3, 15)
        self.assertEqual(next_occurrence(base, Frequency.WEEKLY), date(2025, 3, 22))
        self.assertEqual(next_occurrence(base, Frequency.MONTHLY), date(2025, 4, 15))
        self.assertEqual(next_occurrence(base, Frequency.QUARTERLY), date(2025, 6, 15))
        self.assertEqual(next_occurrence(base, Frequency.SEMIANNUAL), date(2025, 9, 15))
        self.assertEqual(next_occurrence(base, Frequency.ANNUAL), date(2026, 3, 15))


class ScheduledMaintenanceTest(TestCase):
    def setUp(self):
        self.vehicle = Vehicle.objects.create(
            brand='Volkswagen',
            model='Delivery',
            year=2020,
            plate='abc1d23',
            mileage=50000
        )
        self.category = ServiceCategory.objects.create(name='Lubrificação')
        self.today = timezone.localdate()

    def _plan(self, **overrides):
        data = {
            'vehicle': self.vehicle,
            'category': self.category,
            'title': 'Troca de óleo',
            'description': 'Óleo e filtro',
            'frequency': Frequency.MONTHLY,
            'next_due_date': self.today + timedelta(days=2),
        }
        data.update(overrides)
        return ScheduledMaintenance.objects.create(**data)

    def test_complete_rolls_forward_and_stays_pending(self):
        plan = self._plan()
        original_due = plan.next_due_date

        plan.complete()
        plan.refresh_from_db()

        self.assertEqual(plan.next_due_date, add_months(original_due, 1))
        self.assertEqual(plan.status, MaintenanceStatus.PENDING)
        self.assertIsNotNone(plan.last_completed_at)

    def test_complete_overdue_plan_lands_in_future(self):
        plan = self._plan(frequency=Frequency.WEEKLY, next_due_date=self.today - timedelta(days=30))
        self.assertTrue(plan.is_overdue())

        plan.complete()

        self.assertGreater(plan.next_due_date, self.today)
        self.assertFalse(plan.is_overdue())

    def test_complete_updates_vehicle_mileage_only_forward(self):
        plan = self._plan()
        plan.complete(mileage=52000)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.mileage, 52000)

        plan.complete(mileage=10)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.mileage, 52000)

    def test_cancelled_plan_cannot_be_completed(self):
        plan = self._plan(status=MaintenanceStatus.CANCELLED, next_due_date=self.today - timedelta(days=1))
        self.assertFalse(plan.is_overdue())
        with self.assertRaises(InvalidTransition):
            plan.complete()

    def test_complete_uses_stored_state_not_stale_instance(self):
        plan = self._plan(frequency=Frequency.QUARTERLY)
        stale = ScheduledMaintenance.objects.get(pk=plan.pk)
        original_due = plan.next_due_date

        plan.complete()
        stale.complete()

        stale.refresh_from_db()
        self.assertEqual(stale.next_due_date, add_months(original_due, 6))

    def test_failed_vehicle_update_rolls_back_plan(self):
        plan = self._plan()
        original_due = plan.next_due_date

        with mock.patch.object(Vehicle, 'save', side_effect=DatabaseError('falha')):
            with self.assertRaises(DatabaseError):
                plan.complete(mileage=60000)

        plan.refresh_from_db()
        self.assertEqual(plan.next_due_date, original_due)
        self.assertIsNone(plan.last_completed_at)
