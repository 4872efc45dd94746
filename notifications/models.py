import uuid
from django.db import models


class NotificationKind(models.TextChoices):
    REPORT = 'report', 'Reporte'
    DIAGNOSTIC = 'diagnostic', 'Diagnóstico'
    WORK_ORDER = 'work_order', 'Ordem de trabalho'
    VEHICLE = 'vehicle', 'Veículo'
    INVENTORY = 'inventory', 'Estoque'


class Notification(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    kind = models.CharField(max_length=20, choices=NotificationKind.choices, verbose_name='Tipo')
    title = models.CharField(max_length=150, verbose_name='Título')
    message = models.TextField(verbose_name='Mensagem')
    read = models.BooleanField(default=False, verbose_name='Lida')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criada em')

    class Meta:
        verbose_name = 'Notificação'
        verbose_name_plural = 'Notificações'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['read'], name='notification_read_idx'),
        ]

    def __str__(self):
        return self.title
