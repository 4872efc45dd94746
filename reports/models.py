import uuid
from django.db import models
from django.conf import settings


class ReportStatus(models.TextChoices):
    PENDING = 'pending', 'Pendente'
    DIAGNOSTICO = 'diagnostico', 'Em diagnóstico'
    IN_PROGRESS = 'in_progress', 'Em andamento'
    RESOLVED = 'resolved', 'Resolvido'


class Report(models.Model):
    """
    Reporte de falha de um veículo.
    Ponto de entrada do ciclo: reporte -> diagnóstico -> ordem de trabalho.

    O status só é alterado pelas ações de lifecycle.services.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    vehicle = models.ForeignKey(
        'vehicles.Vehicle',
        on_delete=models.PROTECT,
        related_name='reports',
        verbose_name='Veículo'
    )
    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reports',
        verbose_name='Reportado por'
    )

    description = models.TextField(verbose_name='Descrição')
    # Lista de {"url": ..., "description": ...}
    images = models.JSONField(default=list, blank=True, verbose_name='Imagens')
    audio_url = models.URLField(max_length=500, blank=True, verbose_name='Áudio')
    notes = models.TextField(blank=True, verbose_name='Observações')

    status = models.CharField(
        max_length=12,
        choices=ReportStatus.choices,
        default=ReportStatus.PENDING,
        verbose_name='Status'
    )
    assigned_to_employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_reports',
        verbose_name='Atribuído a'
    )
    assigned_at = models.DateTimeField(null=True, blank=True, verbose_name='Atribuído em')
    resolved_at = models.DateTimeField(null=True, blank=True, verbose_name='Resolvido em')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Reporte'
        verbose_name_plural = 'Reportes'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='report_status_idx'),
            models.Index(fields=['created_at'], name='report_created_idx'),
        ]

    def __str__(self):
        return f'Reporte {str(self.id)[:8]} - {self.vehicle.plate}'
