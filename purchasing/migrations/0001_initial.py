import uuid
from decimal import Decimal

import django.core.validators
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('provider', '0001_initial'),
        ('inventory', '0001_initial'),
        ('workorder', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PurchaseQuote',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quote_number', models.CharField(blank=True, max_length=30, unique=True, verbose_name='Número')),
                ('quote_date', models.DateField(default=django.utils.timezone.localdate, verbose_name='Data da cotação')),
                ('expiration_date', models.DateField(blank=True, null=True, verbose_name='Validade')),
                ('status', models.CharField(choices=[('draft', 'Rascunho'), ('sent', 'Enviada'), ('accepted', 'Aceita'), ('rejected', 'Rejeitada'), ('expired', 'Expirada')], default='draft', max_length=10, verbose_name='Status')),
                ('subtotal', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='Subtotal')),
                ('tax', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='Imposto')),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='Total')),
                ('notes', models.TextField(blank=True, verbose_name='Observações')),
                ('decided_at', models.DateTimeField(blank=True, null=True, verbose_name='Decidida em')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='purchase_quotes', to=settings.AUTH_USER_MODEL, verbose_name='Criada por')),
                ('decided_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='decided_purchase_quotes', to=settings.AUTH_USER_MODEL, verbose_name='Decidida por')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchase_quotes', to='provider.provider', verbose_name='Fornecedor')),
                ('work_order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='purchase_quotes', to='workorder.workorder', verbose_name='Ordem de trabalho')),
            ],
            options={
                'verbose_name': 'Cotação de compra',
                'verbose_name_plural': 'Cotações de compra',
                'ordering': ['-quote_date', '-created_at'],
                'indexes': [models.Index(fields=['status', 'quote_date'], name='purchase_quote_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='PurchaseQuoteItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('description', models.CharField(max_length=200, verbose_name='Descrição')),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)], verbose_name='Quantidade')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Preço unitário')),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='Total')),
                ('notes', models.TextField(blank=True, verbose_name='Observações')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('inventory_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quote_items', to='inventory.inventoryitem', verbose_name='Item de estoque')),
                ('quote', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='purchasing.purchasequote', verbose_name='Cotação')),
            ],
            options={
                'verbose_name': 'Item da cotação',
                'verbose_name_plural': 'Itens da cotação',
                'ordering': ['created_at'],
            },
        ),
    ]
