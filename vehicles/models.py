import uuid
from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator


class VehicleStatus(models.TextChoices):
    ACTIVE = 'active', 'Ativo'
    IN_SERVICE = 'in-service', 'Em serviço'
    INACTIVE = 'inactive', 'Inativo'


class FuelType(models.TextChoices):
    GASOLINE = 'gasoline', 'Gasolina'
    DIESEL = 'diesel', 'Diesel'
    GAS = 'gas', 'Gás'
    ELECTRIC = 'electric', 'Elétrico'
    HYBRID = 'hybrid', 'Híbrido'


class VehicleType(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=80, unique=True, verbose_name='Nome')
    description = models.TextField(verbose_name='Descrição')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Tipo de veículo'
        verbose_name_plural = 'Tipos de veículo'
        ordering = ['name']

    def __str__(self):
        return self.name


class Vehicle(models.Model):
    """
    Veículo da frota.

    O campo ``status`` é derivado das ordens de trabalho abertas: só o motor
    de ciclo de vida (lifecycle) coloca ou retira um veículo de "in-service".
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='vehicles',
        verbose_name='Cliente'
    )
    branch = models.ForeignKey(
        'clients.ClientBranch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='vehicles',
        verbose_name='Sucursal'
    )
    vehicle_type = models.ForeignKey(
        VehicleType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='vehicles',
        verbose_name='Tipo'
    )

    brand = models.CharField(max_length=60, verbose_name='Marca')
    model = models.CharField(max_length=60, verbose_name='Modelo')
    year = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1950)],
        verbose_name='Ano'
    )
    plate = models.CharField(max_length=15, unique=True, verbose_name='Placa')
    vin = models.CharField(max_length=17, blank=True, verbose_name='VIN')
    color = models.CharField(max_length=30, blank=True, verbose_name='Cor')
    mileage = models.PositiveIntegerField(default=0, verbose_name='Quilometragem')
    fuel_type = models.CharField(
        max_length=10,
        choices=FuelType.choices,
        default=FuelType.GASOLINE,
        verbose_name='Combustível'
    )
    status = models.CharField(
        max_length=12,
        choices=VehicleStatus.choices,
        default=VehicleStatus.ACTIVE,
        verbose_name='Status'
    )
    assigned_area = models.CharField(max_length=100, blank=True, verbose_name='Área atribuída')
    economic_number = models.CharField(max_length=30, blank=True, verbose_name='Número econômico')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Veículo'
        verbose_name_plural = 'Veículos'
        ordering = ['plate']
        indexes = [
            models.Index(fields=['status'], name='vehicle_status_idx'),
            models.Index(fields=['economic_number'], name='vehicle_econ_number_idx'),
        ]

    def __str__(self):
        label = f'{self.brand} {self.model} ({self.plate})'
        if self.economic_number:
            return f'{self.economic_number} - {label}'
        return label

    def save(self, *args, **kwargs):
        self.plate = (self.plate or '').strip().upper()
        super().save(*args, **kwargs)


class VehicleBranchHistory(models.Model):
    """
    Transferência de um veículo entre sucursais.
    Gravado apenas por ``vehicles.services.transfer_vehicle``; nunca editado.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vehicle = models.ForeignKey(
        Vehicle,
        on_delete=models.CASCADE,
        related_name='branch_history',
        verbose_name='Veículo'
    )
    from_branch = models.ForeignKey(
        'clients.ClientBranch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='vehicles_transferred_out',
        verbose_name='Sucursal de origem'
    )
    to_branch = models.ForeignKey(
        'clients.ClientBranch',
        on_delete=models.SET_NULL,
        null=True,
        related_name='vehicles_transferred_in',
        verbose_name='Sucursal de destino'
    )
    reason = models.TextField(verbose_name='Motivo')
    transferred_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='vehicle_transfers',
        verbose_name='Transferido por'
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Transferido em')

    class Meta:
        verbose_name = 'Transferência de veículo'
        verbose_name_plural = 'Transferências de veículo'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['vehicle', 'created_at'], name='vehicle_branch_hist_idx'),
        ]

    def __str__(self):
        return f'{self.vehicle.plate}: {self.from_branch or "-"} -> {self.to_branch or "-"}'
