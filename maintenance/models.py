import calendar
import uuid
from datetime import timedelta

from django.db import models, transaction
from django.utils import timezone

from lifecycle.exceptions import InvalidTransition
from vehicles.models import Vehicle


class ServiceCategory(models.Model):
    """Ex: Lubrificação, Freios, Elétrica."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=80, unique=True, verbose_name='Nome')
    description = models.TextField(blank=True, verbose_name='Descrição')
    active = models.BooleanField(default=True, verbose_name='Ativa')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Categoria de serviço'
        verbose_name_plural = 'Categorias de serviço'
        ordering = ['name']

    def __str__(self):
        return self.name


class Frequency(models.TextChoices):
    WEEKLY = 'weekly', 'Semanal'
    MONTHLY = 'monthly', 'Mensal'
    QUARTERLY = 'quarterly', 'Trimestral'
    SEMIANNUAL = 'semiannual', 'Semestral'
    ANNUAL = 'annual', 'Anual'


class MaintenanceStatus(models.TextChoices):
    PENDING = 'pending', 'Pendente'
    COMPLETED = 'completed', 'Concluída'
    CANCELLED = 'cancelled', 'Cancelada'


FREQUENCY_MONTHS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.SEMIANNUAL: 6,
    Frequency.ANNUAL: 12,
}


def add_months(value, months):
    """Soma meses a uma data, limitando o dia ao último dia do mês de destino."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def next_occurrence(value, frequency):
    if frequency == Frequency.WEEKLY:
        return value + timedelta(days=7)
    return add_months(value, FREQUENCY_MONTHS[frequency])


class ScheduledMaintenance(models.Model):
    """
    Manutenção preventiva recorrente de um veículo.

    Ao concluir uma ocorrência o plano continua ``pending`` com a próxima data
    já calculada; ``completed`` e ``cancelled`` encerram o plano.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vehicle = models.ForeignKey(
        'vehicles.Vehicle',
        on_delete=models.CASCADE,
        related_name='scheduled_maintenance',
        verbose_name='Veículo'
    )
    category = models.ForeignKey(
        ServiceCategory,
        on_delete=models.PROTECT,
        related_name='scheduled_maintenance',
        verbose_name='Categoria'
    )
    title = models.CharField(max_length=150, verbose_name='Título')
    description = models.TextField(verbose_name='Descrição')
    frequency = models.CharField(max_length=12, choices=Frequency.choices, verbose_name='Frequência')
    next_due_date = models.DateField(verbose_name='Próxima data')
    next_due_mileage = models.PositiveIntegerField(null=True, blank=True, verbose_name='Próxima quilometragem')
    estimated_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Custo estimado'
    )
    status = models.CharField(
        max_length=12,
        choices=MaintenanceStatus.choices,
        default=MaintenanceStatus.PENDING,
        verbose_name='Status'
    )
    last_completed_at = models.DateTimeField(null=True, blank=True, verbose_name='Última execução')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Manutenção programada'
        verbose_name_plural = 'Manutenções programadas'
        ordering = ['next_due_date']
        indexes = [
            models.Index(fields=['status', 'next_due_date'], name='maintenance_due_idx'),
        ]

    def __str__(self):
        return f'{self.title} - {self.vehicle.plate}'

    def is_overdue(self, today=None):
        today = today or timezone.localdate()
        return self.status == MaintenanceStatus.PENDING and self.next_due_date < today

    def complete(self, mileage=None):
        """
        Registra a execução da ocorrência atual e agenda a próxima.

        A data é rolada pela frequência até ficar no futuro, de modo que um
        plano muito atrasado não continue vencido logo após a execução.
        O cálculo parte da linha travada no banco, não da instância em memória.
        """
        with transaction.atomic():
            plan = ScheduledMaintenance.objects.select_for_update().get(pk=self.pk)

            if plan.status != MaintenanceStatus.PENDING:
                raise InvalidTransition(
                    f'Manutenção "{plan.title}" não está pendente.',
                    status=plan.status,
                )

            today = timezone.localdate()
            due = next_occurrence(plan.next_due_date, plan.frequency)
            while due <= today:
                due = next_occurrence(due, plan.frequency)

            plan.next_due_date = due
            plan.last_completed_at = timezone.now()
            plan.save(update_fields=['next_due_date', 'last_completed_at', 'updated_at'])

            if mileage is not None:
                mileage = int(mileage)
                vehicle = Vehicle.objects.select_for_update().get(pk=plan.vehicle_id)
                if mileage > vehicle.mileage:
                    vehicle.mileage = mileage
                    vehicle.save(update_fields=['mileage', 'updated_at'])

        self.status = plan.status
        self.next_due_date = plan.next_due_date
        self.last_completed_at = plan.last_completed_at
        self.updated_at = plan.updated_at
        return self
