import uuid
from decimal import Decimal
from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError


class InventoryCategory(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=80, unique=True, verbose_name='Nome')
    description = models.TextField(verbose_name='Descrição')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Categoria de estoque'
        verbose_name_plural = 'Categorias de estoque'
        ordering = ['name']

    def __str__(self):
        return self.name


class InventoryItem(models.Model):
    """
    Peça ou insumo em estoque.
    ``quantity`` só deve ser alterada por movimentações (inventory.services).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=150, verbose_name='Nome')
    category = models.ForeignKey(
        InventoryCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items',
        verbose_name='Categoria'
    )
    part_number = models.CharField(
        max_length=60,
        unique=True,
        null=True,
        blank=True,
        verbose_name='Número da peça'
    )
    quantity = models.PositiveIntegerField(default=0, verbose_name='Quantidade')
    min_quantity = models.PositiveIntegerField(default=0, verbose_name='Quantidade mínima')
    max_quantity = models.PositiveIntegerField(default=0, verbose_name='Quantidade máxima')
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name='Preço unitário'
    )
    location = models.CharField(max_length=100, blank=True, verbose_name='Localização')
    provider = models.ForeignKey(
        'provider.Provider',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inventory_items',
        verbose_name='Fornecedor'
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Item de estoque'
        verbose_name_plural = 'Itens de estoque'
        ordering = ['name']

    def __str__(self):
        if self.part_number:
            return f'{self.name} ({self.part_number})'
        return self.name

    def clean(self):
        super().clean()
        if self.max_quantity and self.min_quantity > self.max_quantity:
            raise ValidationError({'min_quantity': 'A quantidade mínima não pode superar a máxima.'})

    @property
    def is_low_stock(self):
        return self.quantity <= self.min_quantity

    @property
    def stock_value(self):
        return self.unit_price * self.quantity


class MovementType(models.TextChoices):
    IN = 'in', 'Entrada'
    OUT = 'out', 'Saída'
    ADJUSTMENT = 'adjustment', 'Ajuste'


class InventoryMovement(models.Model):
    """Registro imutável de cada alteração de saldo de um item."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.CASCADE,
        related_name='movements',
        verbose_name='Item'
    )
    movement_type = models.CharField(max_length=12, choices=MovementType.choices, verbose_name='Tipo')
    quantity = models.PositiveIntegerField(verbose_name='Quantidade')
    balance_after = models.PositiveIntegerField(default=0, verbose_name='Saldo após')
    # Ex: "WO 3f2a..." quando a saída veio de um material aprovado
    reference = models.CharField(max_length=100, blank=True, verbose_name='Referência')
    notes = models.TextField(blank=True, verbose_name='Observações')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inventory_movements',
        verbose_name='Registrado por'
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Movimentação de estoque'
        verbose_name_plural = 'Movimentações de estoque'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.get_movement_type_display()} {self.quantity} - {self.item.name}'
