from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from lifecycle.exceptions import ValidationError
from notifications.models import Notification, NotificationKind
from .models import InventoryItem, InventoryMovement, MovementType
from .services import register_movement


User = get_user_model()


class RegisterMovementTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email='almox@example.com',
            password='test123',
            role='supervisor'
        )
        self.item = InventoryItem.objects.create(
            name='Filtro de óleo',
            part_number='FO-100',
            quantity=10,
            min_quantity=3,
            unit_price=Decimal('35.00')
        )

    def test_in_adds_to_balance(self):
        movement = register_movement(self.item, MovementType.IN, 5, self.user, reference='NF 123')
        self.item.refresh_from_db()
        self.assertEqual(self.item.quantity, 15)
        self.assertEqual(movement.balance_after, 15)
        self.assertEqual(movement.created_by, self.user)

    def test_out_subtracts_from_balance(self):
        register_movement(self.item, MovementType.OUT, 4, self.user)
        self.item.refresh_from_db()
        self.assertEqual(self.item.quantity, 6)

    def test_out_cannot_go_negative(self):
        with self.assertRaises(ValidationError):
            register_movement(self.item, MovementType.OUT, 11, self.user)
        self.item.refresh_from_db()
        self.assertEqual(self.item.quantity, 10)
        self.assertFalse(InventoryMovement.objects.exists())

    def test_adjustment_sets_absolute_quantity(self):
        register_movement(self.item, MovementType.ADJUSTMENT, 2, self.user, notes='Inventário físico')
        self.item.refresh_from_db()
        self.assertEqual(self.item.quantity, 2)

    def test_invalid_type_and_quantity_are_rejected(self):
        with self.assertRaises(ValidationError):
            register_movement(self.item, 'transfer', 1, self.user)
        with self.assertRaises(ValidationError):
            register_movement(self.item, MovementType.IN, 0, self.user)
        with self.assertRaises(ValidationError):
            register_movement(self.item, MovementType.IN, 'abc', self.user)


class LowStockSignalTest(TestCase):
    def setUp(self):
        self.item = InventoryItem.objects.create(
            name='Pastilha de freio',
            quantity=5,
            min_quantity=2
        )

    def _low_stock_notifications(self):
        return Notification.objects.filter(kind=NotificationKind.INVENTORY)

    def test_notifies_once_when_crossing_minimum(self):
        register_movement(self.item, MovementType.OUT, 3)
        self.assertEqual(self._low_stock_notifications().count(), 1)

        # Continua abaixo do mínimo: nada de novo
        register_movement(self.item, MovementType.OUT, 1)
        self.assertEqual(self._low_stock_notifications().count(), 1)

    def test_no_notification_above_minimum(self):
        register_movement(self.item, MovementType.OUT, 1)
        self.assertFalse(self._low_stock_notifications().exists())

    def test_is_low_stock(self):
        self.assertFalse(self.item.is_low_stock)
        self.item.quantity = 2
        self.assertTrue(self.item.is_low_stock)
