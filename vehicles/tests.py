from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from clients.models import Client, ClientBranch
from lifecycle.exceptions import Forbidden, NotFound, StorageFailure, ValidationError
from notifications.models import Notification, NotificationKind
from .models import Vehicle, VehicleBranchHistory
from .services import transfer_vehicle


User = get_user_model()


class TransferVehicleTest(TestCase):
    def setUp(self):
        self.supervisor = User.objects.create_user(email='supervisor@example.com', password='test123', role='supervisor')
        self.operator = User.objects.create_user(email='operador@example.com', password='test123', role='operator')
        self.client_a = Client.objects.create(
            name='Transportes Sul', phone='5133330000', email='contato@sul.example.com', address='Av. Brasil, 100'
        )
        self.client_b = Client.objects.create(
            name='Logística Norte', phone='9133330000', email='contato@norte.example.com', address='Rua Pará, 20'
        )
        self.matriz = ClientBranch.objects.create(client=self.client_a, name='Matriz', address='Av. Brasil, 100')
        self.filial = ClientBranch.objects.create(client=self.client_a, name='Filial Canoas', address='Rua Canoas, 5')
        self.other_client_branch = ClientBranch.objects.create(client=self.client_b, name='Belém', address='Rua Pará, 20')
        self.vehicle = Vehicle.objects.create(
            brand='Volvo', model='FH', year=2021, plate='ABC1D23', mileage=50000,
            client=self.client_a, branch=self.matriz
        )

    def test_transfer_moves_vehicle_and_records_history(self):
        vehicle, entry = transfer_vehicle(self.vehicle.pk, self.filial.pk, 'Demanda maior em Canoas', self.supervisor)

        self.assertEqual(vehicle.branch, self.filial)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.branch_id, self.filial.pk)
        self.assertEqual(entry.from_branch, self.matriz)
        self.assertEqual(entry.to_branch, self.filial)
        self.assertEqual(entry.transferred_by, self.supervisor)
        self.assertEqual(entry.reason, 'Demanda maior em Canoas')
        self.assertTrue(Notification.objects.filter(kind=NotificationKind.VEHICLE).exists())

    def test_vehicle_without_client_adopts_branch_client(self):
        loose = Vehicle.objects.create(brand='Fiat', model='Ducato', year=2018, plate='DEF4G56')

        vehicle, entry = transfer_vehicle(loose.pk, self.other_client_branch.pk, 'Contrato novo', self.supervisor)

        self.assertEqual(vehicle.client, self.client_b)
        self.assertIsNone(entry.from_branch)

    def test_reason_is_required(self):
        with self.assertRaises(ValidationError) as ctx:
            transfer_vehicle(self.vehicle.pk, self.filial.pk, '   ', self.supervisor)
        self.assertIn('reason', ctx.exception.errors)
        self.assertFalse(VehicleBranchHistory.objects.exists())

    def test_same_branch_is_refused(self):
        with self.assertRaises(ValidationError):
            transfer_vehicle(self.vehicle.pk, self.matriz.pk, 'Sem motivo real', self.supervisor)

    def test_branch_of_other_client_is_refused(self):
        with self.assertRaises(ValidationError):
            transfer_vehicle(self.vehicle.pk, self.other_client_branch.pk, 'Venda', self.supervisor)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.branch, self.matriz)

    def test_inactive_branch_is_refused(self):
        self.filial.is_active = False
        self.filial.save()
        with self.assertRaises(ValidationError):
            transfer_vehicle(self.vehicle.pk, self.filial.pk, 'Reorganização', self.supervisor)

    def test_unknown_branch_or_vehicle(self):
        with self.assertRaises(NotFound):
            transfer_vehicle(self.vehicle.pk, self.client_a.pk, 'Reorganização', self.supervisor)
        with self.assertRaises(NotFound):
            transfer_vehicle(self.client_a.pk, self.filial.pk, 'Reorganização', self.supervisor)

    def test_operator_cannot_transfer(self):
        with self.assertRaises(Forbidden):
            transfer_vehicle(self.vehicle.pk, self.filial.pk, 'Reorganização', self.operator)

    def test_history_failure_rolls_back_branch_change(self):
        with mock.patch.object(VehicleBranchHistory.objects, 'create', side_effect=DatabaseError('disk full')):
            with self.assertRaises(StorageFailure):
                transfer_vehicle(self.vehicle.pk, self.filial.pk, 'Reorganização', self.supervisor)

        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.branch, self.matriz)
