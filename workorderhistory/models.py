import uuid
from django.db import models
from django.conf import settings

from workorder.models import WorkOrderStatus


class WorkOrderHistory(models.Model):
    """
    Histórico de eventos da Ordem de Trabalho.
    Uma linha por mudança de status; nunca é editado nem removido
    (exceto junto com a própria OT).
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    work_order = models.ForeignKey(
        'workorder.WorkOrder',
        on_delete=models.CASCADE,
        related_name='history',
        verbose_name='Ordem de trabalho'
    )

    previous_status = models.CharField(
        max_length=20,
        choices=WorkOrderStatus.choices,
        blank=True,
        verbose_name='Status anterior'
    )

    new_status = models.CharField(
        max_length=20,
        choices=WorkOrderStatus.choices,
        verbose_name='Novo status'
    )

    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        verbose_name='Alterado por'
    )

    note = models.TextField(
        blank=True,
        verbose_name='Observação'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    class Meta:
        verbose_name = 'Histórico da OT'
        verbose_name_plural = 'Históricos da OT'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['work_order'], name='wo_history_work_order_idx'),
            models.Index(fields=['created_at'], name='wo_history_created_idx'),
        ]

    def __str__(self):
        return f'{self.work_order.code} -> {self.get_new_status_display()}'
