import uuid
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator


class Severity(models.TextChoices):
    LOW = 'low', 'Baixa'
    MEDIUM = 'medium', 'Média'
    HIGH = 'high', 'Alta'
    CRITICAL = 'critical', 'Crítica'


class Diagnostic(models.Model):
    """
    Avaliação técnica de um reporte, feita pelo funcionário atribuído.

    Enquanto ``approved_at`` está vazio o diagnóstico está "aberto" e pode ser
    editado; a aprovação gera a ordem de trabalho e congela o registro.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    report = models.ForeignKey(
        'reports.Report',
        on_delete=models.PROTECT,
        related_name='diagnostics',
        verbose_name='Reporte'
    )
    employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.PROTECT,
        related_name='diagnostics',
        verbose_name='Funcionário'
    )

    diagnosis = models.TextField(verbose_name='Diagnóstico / causa provável')
    recommendations = models.TextField(blank=True, verbose_name='Recomendação técnica')
    estimated_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name='Custo estimado'
    )
    odometer = models.PositiveIntegerField(null=True, blank=True, verbose_name='Odômetro')
    vehicle_condition = models.CharField(max_length=100, blank=True, verbose_name='Condição do veículo')
    fuel_level = models.CharField(max_length=30, blank=True, verbose_name='Nível de combustível')
    severity = models.CharField(
        max_length=10,
        choices=Severity.choices,
        default=Severity.MEDIUM,
        verbose_name='Severidade'
    )
    estimated_repair_time = models.CharField(max_length=60, blank=True, verbose_name='Tempo estimado de reparo')
    required_materials = models.TextField(blank=True, verbose_name='Materiais necessários')
    requires_additional_tests = models.BooleanField(default=False, verbose_name='Requer testes adicionais')

    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_diagnostics',
        verbose_name='Aprovado por'
    )
    approved_at = models.DateTimeField(null=True, blank=True, verbose_name='Aprovado em')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Diagnóstico'
        verbose_name_plural = 'Diagnósticos'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['report'],
                condition=models.Q(approved_at__isnull=True),
                name='unique_open_diagnostic_per_report',
            ),
        ]

    def __str__(self):
        return f'Diagnóstico {str(self.id)[:8]} - {self.get_severity_display()}'

    @property
    def is_approved(self):
        return self.approved_at is not None
