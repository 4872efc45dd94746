from datetime import timedelta
from decimal import Decimal

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from inventory.models import InventoryItem
from lifecycle import services as lifecycle_services
from lifecycle.exceptions import Forbidden, InvalidTransition, ValidationError
from lifecycle.tests import FleetFixtureMixin
from provider.models import Provider
from workorder.models import WorkOrderMaterial, WorkOrderStatus
from .models import PurchaseQuote, PurchaseQuoteItem, QuoteStatus
from .services import change_quote_status, expire_overdue_quotes


class QuoteFixtureMixin(FleetFixtureMixin):
    def setUp(self):
        super().setUp()
        self.provider = Provider.objects.create(
            name='Auto Peças Centro',
            phone='1133334444',
            email='vendas@autopecas.example.com',
            address='Rua das Oficinas, 10'
        )
        self.item = InventoryItem.objects.create(name='Pastilha de freio', quantity=2, unit_price=Decimal('80.00'))

    def quote_with_items(self, **fields):
        quote = PurchaseQuote.objects.create(provider=self.provider, created_by=self.supervisor, **fields)
        PurchaseQuoteItem.objects.create(
            quote=quote, inventory_item=self.item, description='Pastilha de freio', quantity=4, unit_price=Decimal('85.50')
        )
        PurchaseQuoteItem.objects.create(quote=quote, description='Mão de obra', quantity=1, unit_price=Decimal('120.00'))
        return quote.recalculate_totals()


class PurchaseQuoteTotalsTest(QuoteFixtureMixin, TestCase):
    def test_number_is_generated(self):
        quote = PurchaseQuote.objects.create(provider=self.provider)
        self.assertTrue(quote.quote_number.startswith('COT-'))

    def test_item_total_and_quote_totals(self):
        quote = self.quote_with_items()

        self.assertEqual(quote.items.get(description='Pastilha de freio').total, Decimal('342.00'))
        self.assertEqual(quote.subtotal, Decimal('462.00'))
        self.assertEqual(quote.tax, Decimal('73.92'))
        self.assertEqual(quote.total, Decimal('535.92'))

    @override_settings(PURCHASE_QUOTE_TAX_RATE='0')
    def test_tax_rate_comes_from_settings(self):
        quote = self.quote_with_items()
        self.assertEqual(quote.tax, Decimal('0.00'))
        self.assertEqual(quote.total, quote.subtotal)


class ChangeQuoteStatusTest(QuoteFixtureMixin, TestCase):
    def test_send_requires_items(self):
        quote = PurchaseQuote.objects.create(provider=self.provider)
        with self.assertRaises(ValidationError):
            change_quote_status(quote.pk, QuoteStatus.SENT, self.supervisor)

    def test_draft_cannot_be_accepted_directly(self):
        quote = self.quote_with_items()
        with self.assertRaises(InvalidTransition):
            change_quote_status(quote.pk, QuoteStatus.ACCEPTED, self.supervisor)

    def test_technician_cannot_decide(self):
        quote = self.quote_with_items()
        with self.assertRaises(Forbidden):
            change_quote_status(quote.pk, QuoteStatus.SENT, self.tech_user)

    def test_unknown_status(self):
        quote = self.quote_with_items()
        with self.assertRaises(ValidationError):
            change_quote_status(quote.pk, 'paid', self.supervisor)

    def test_accept_adds_materials_to_work_order(self):
        work_order = self.approved_work_order()
        quote = self.quote_with_items(work_order=work_order)
        change_quote_status(quote.pk, QuoteStatus.SENT, self.supervisor)

        quote = change_quote_status(quote.pk, QuoteStatus.ACCEPTED, self.supervisor)

        self.assertEqual(quote.status, QuoteStatus.ACCEPTED)
        self.assertEqual(quote.decided_by, self.supervisor)
        materials = WorkOrderMaterial.objects.filter(work_order=work_order).order_by('description')
        self.assertEqual(materials.count(), 2)
        brake_pads = materials.get(description='Pastilha de freio')
        self.assertEqual(brake_pads.inventory_item, self.item)
        self.assertEqual(brake_pads.unit_cost, Decimal('85.50'))
        self.assertEqual(brake_pads.quantity, 4)
        # Materiais da cotação ainda passam pela aprovação
        self.assertIsNone(brake_pads.approved_at)

    def test_accept_refused_for_validated_work_order(self):
        work_order = self.awaiting_validation_work_order()
        quote = self.quote_with_items(work_order=work_order)
        change_quote_status(quote.pk, QuoteStatus.SENT, self.supervisor)
        lifecycle_services.advance_work_order(work_order.pk, WorkOrderStatus.VALIDATED, self.admin)

        with self.assertRaises(InvalidTransition):
            change_quote_status(quote.pk, QuoteStatus.ACCEPTED, self.supervisor)

        quote.refresh_from_db()
        self.assertEqual(quote.status, QuoteStatus.SENT)
        self.assertFalse(WorkOrderMaterial.objects.filter(work_order=work_order).exists())

    def test_expired_quote_cannot_be_accepted(self):
        quote = self.quote_with_items(
            quote_date=timezone.localdate() - timedelta(days=30),
            expiration_date=timezone.localdate() - timedelta(days=1),
        )
        change_quote_status(quote.pk, QuoteStatus.SENT, self.supervisor)
        with self.assertRaises(InvalidTransition):
            change_quote_status(quote.pk, QuoteStatus.ACCEPTED, self.supervisor)

    def test_expire_overdue_quotes(self):
        overdue = self.quote_with_items(expiration_date=timezone.localdate() - timedelta(days=1))
        current = self.quote_with_items(expiration_date=timezone.localdate() + timedelta(days=10))
        draft = self.quote_with_items(expiration_date=timezone.localdate() - timedelta(days=1))
        change_quote_status(overdue.pk, QuoteStatus.SENT, self.supervisor)
        change_quote_status(current.pk, QuoteStatus.SENT, self.supervisor)

        self.assertEqual(expire_overdue_quotes(self.supervisor), 1)

        overdue.refresh_from_db()
        current.refresh_from_db()
        draft.refresh_from_db()
        self.assertEqual(overdue.status, QuoteStatus.EXPIRED)
        self.assertEqual(current.status, QuoteStatus.SENT)
        self.assertEqual(draft.status, QuoteStatus.DRAFT)


class PurchaseQuoteApiTest(QuoteFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.api = APIClient()
        self.api.force_authenticate(user=self.supervisor)

    def test_items_recalculate_quote_totals(self):
        response = self.api.post('/api/v1/purchase-quotes/', {'provider': str(self.provider.pk)}, format='json')
        self.assertEqual(response.status_code, 201)
        quote_id = response.data['id']
        self.assertEqual(response.data['status'], 'draft')

        response = self.api.post(
            '/api/v1/purchase-quote-items/',
            {'quote': quote_id, 'description': 'Filtro de óleo', 'quantity': 3, 'unit_price': '25.00'},
            format='json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['total'], '75.00')
        item_id = response.data['id']

        quote = PurchaseQuote.objects.get(pk=quote_id)
        self.assertEqual(quote.subtotal, Decimal('75.00'))
        self.assertEqual(quote.total, Decimal('87.00'))

        response = self.api.delete(f'/api/v1/purchase-quote-items/{item_id}/')
        self.assertEqual(response.status_code, 204)
        quote.refresh_from_db()
        self.assertEqual(quote.total, Decimal('0.00'))

    def test_item_validation(self):
        quote = PurchaseQuote.objects.create(provider=self.provider)
        response = self.api.post(
            '/api/v1/purchase-quote-items/',
            {'quote': str(quote.pk), 'description': 'Filtro', 'quantity': 0, 'unit_price': '-1.00'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)

    def test_sent_quote_is_frozen(self):
        quote = self.quote_with_items()
        response = self.api.post(f'/api/v1/purchase-quotes/{quote.pk}/advance/', {'target_status': 'sent'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'sent')

        response = self.api.post(
            '/api/v1/purchase-quote-items/',
            {'quote': str(quote.pk), 'description': 'Extra', 'quantity': 1, 'unit_price': '10.00'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'invalid_transition')

        response = self.api.patch(f'/api/v1/purchase-quotes/{quote.pk}/', {'notes': 'Desconto'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_accepted_quote_cannot_be_deleted(self):
        quote = self.quote_with_items()
        self.api.post(f'/api/v1/purchase-quotes/{quote.pk}/advance/', {'target_status': 'sent'}, format='json')
        self.api.post(f'/api/v1/purchase-quotes/{quote.pk}/advance/', {'target_status': 'accepted'}, format='json')

        response = self.api.delete(f'/api/v1/purchase-quotes/{quote.pk}/')
        self.assertEqual(response.status_code, 400)
        self.assertTrue(PurchaseQuote.objects.filter(pk=quote.pk).exists())

    def test_inactive_provider_is_refused(self):
        self.provider.status = Provider.STATUS_INACTIVE
        self.provider.save()
        response = self.api.post('/api/v1/purchase-quotes/', {'provider': str(self.provider.pk)}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_operator_cannot_write(self):
        self.api.force_authenticate(user=self.operator)
        response = self.api.post('/api/v1/purchase-quotes/', {'provider': str(self.provider.pk)}, format='json')
        self.assertEqual(response.status_code, 403)
