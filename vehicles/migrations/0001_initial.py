import uuid

import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('clients', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='VehicleType',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=80, unique=True, verbose_name='Nome')),
                ('description', models.TextField(verbose_name='Descrição')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
            ],
            options={
                'verbose_name': 'Tipo de veículo',
                'verbose_name_plural': 'Tipos de veículo',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Vehicle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('brand', models.CharField(max_length=60, verbose_name='Marca')),
                ('model', models.CharField(max_length=60, verbose_name='Modelo')),
                ('year', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1950)], verbose_name='Ano')),
                ('plate', models.CharField(max_length=15, unique=True, verbose_name='Placa')),
                ('vin', models.CharField(blank=True, max_length=17, verbose_name='VIN')),
                ('color', models.CharField(blank=True, max_length=30, verbose_name='Cor')),
                ('mileage', models.PositiveIntegerField(default=0, verbose_name='Quilometragem')),
                ('fuel_type', models.CharField(choices=[('gasoline', 'Gasolina'), ('diesel', 'Diesel'), ('gas', 'Gás'), ('electric', 'Elétrico'), ('hybrid', 'Híbrido')], default='gasoline', max_length=10, verbose_name='Combustível')),
                ('status', models.CharField(choices=[('active', 'Ativo'), ('in-service', 'Em serviço'), ('inactive', 'Inativo')], default='active', max_length=12, verbose_name='Status')),
                ('assigned_area', models.CharField(blank=True, max_length=100, verbose_name='Área atribuída')),
                ('economic_number', models.CharField(blank=True, max_length=30, verbose_name='Número econômico')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('branch', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='vehicles', to='clients.clientbranch', verbose_name='Sucursal')),
                ('client', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='vehicles', to='clients.client', verbose_name='Cliente')),
                ('vehicle_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='vehicles', to='vehicles.vehicletype', verbose_name='Tipo')),
            ],
            options={
                'verbose_name': 'Veículo',
                'verbose_name_plural': 'Veículos',
                'ordering': ['plate'],
                'indexes': [models.Index(fields=['status'], name='vehicle_status_idx'), models.Index(fields=['economic_number'], name='vehicle_econ_number_idx')],
            },
        ),
    ]
