import uuid
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum
from django.utils import timezone


CENT = Decimal('0.01')


class QuoteStatus(models.TextChoices):
    DRAFT = 'draft', 'Rascunho'
    SENT = 'sent', 'Enviada'
    ACCEPTED = 'accepted', 'Aceita'
    REJECTED = 'rejected', 'Rejeitada'
    EXPIRED = 'expired', 'Expirada'


class PurchaseQuote(models.Model):
    """
    Cotação de compra junto a um fornecedor.

    Subtotal, imposto e total são derivados dos itens; a alíquota vem de
    ``settings.PURCHASE_QUOTE_TAX_RATE``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    quote_number = models.CharField(max_length=30, unique=True, blank=True, verbose_name='Número')
    provider = models.ForeignKey(
        'provider.Provider',
        on_delete=models.PROTECT,
        related_name='purchase_quotes',
        verbose_name='Fornecedor'
    )
    work_order = models.ForeignKey(
        'workorder.WorkOrder',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchase_quotes',
        verbose_name='Ordem de trabalho'
    )
    quote_date = models.DateField(default=timezone.localdate, verbose_name='Data da cotação')
    expiration_date = models.DateField(null=True, blank=True, verbose_name='Validade')
    status = models.CharField(
        max_length=10,
        choices=QuoteStatus.choices,
        default=QuoteStatus.DRAFT,
        verbose_name='Status'
    )

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), verbose_name='Subtotal')
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), verbose_name='Imposto')
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), verbose_name='Total')
    notes = models.TextField(blank=True, verbose_name='Observações')

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchase_quotes',
        verbose_name='Criada por'
    )
    decided_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='decided_purchase_quotes',
        verbose_name='Decidida por'
    )
    decided_at = models.DateTimeField(null=True, blank=True, verbose_name='Decidida em')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Cotação de compra'
        verbose_name_plural = 'Cotações de compra'
        ordering = ['-quote_date', '-created_at']
        indexes = [
            models.Index(fields=['status', 'quote_date'], name='purchase_quote_status_idx'),
        ]

    def __str__(self):
        return f'{self.quote_number} - {self.provider}'

    def save(self, *args, **kwargs):
        if not self.quote_number:
            self.quote_number = f'COT-{timezone.localdate():%Y%m%d}-{self.id.hex[:6].upper()}'
        super().save(*args, **kwargs)

    def is_expired(self, today=None):
        today = today or timezone.localdate()
        return self.expiration_date is not None and self.expiration_date < today

    def recalculate_totals(self):
        subtotal = self.items.aggregate(value=Sum('total'))['value'] or Decimal('0.00')
        rate = Decimal(str(getattr(settings, 'PURCHASE_QUOTE_TAX_RATE', '0.16')))
        self.subtotal = subtotal.quantize(CENT, rounding=ROUND_HALF_UP)
        self.tax = (self.subtotal * rate).quantize(CENT, rounding=ROUND_HALF_UP)
        self.total = self.subtotal + self.tax
        self.save(update_fields=['subtotal', 'tax', 'total', 'updated_at'])
        return self


class PurchaseQuoteItem(models.Model):
    """Linha da cotação; ``total`` = quantidade x preço unitário."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    quote = models.ForeignKey(
        PurchaseQuote,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name='Cotação'
    )
    inventory_item = models.ForeignKey(
        'inventory.InventoryItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='quote_items',
        verbose_name='Item de estoque'
    )
    description = models.CharField(max_length=200, verbose_name='Descrição')
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        verbose_name='Quantidade'
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        verbose_name='Preço unitário'
    )
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), verbose_name='Total')
    notes = models.TextField(blank=True, verbose_name='Observações')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Item da cotação'
        verbose_name_plural = 'Itens da cotação'
        ordering = ['created_at']

    def __str__(self):
        return f'{self.description} x{self.quantity}'

    def save(self, *args, **kwargs):
        self.total = (Decimal(self.quantity) * self.unit_price).quantize(CENT, rounding=ROUND_HALF_UP)
        super().save(*args, **kwargs)
