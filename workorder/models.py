import uuid
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone


class WorkOrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pendente'
    IN_PROGRESS = 'in_progress', 'Em andamento'
    COMPLETED = 'completed', 'Concluída'
    AWAITING_VALIDATION = 'awaiting_validation', 'Aguardando validação'
    VALIDATED = 'validated', 'Validada'


class Priority(models.TextChoices):
    LOW = 'low', 'Baixa'
    NORMAL = 'normal', 'Normal'
    HIGH = 'high', 'Alta'
    URGENT = 'urgent', 'Urgente'


class WorkOrder(models.Model):
    """
    Ordem de Trabalho (O.T.)
    Nasce apenas da aprovação de um diagnóstico e segue o fluxo
    pendente -> em andamento -> concluída -> aguardando validação -> validada.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # Identificação operacional
    code = models.CharField(
        max_length=30,
        unique=True,
        blank=True,
        verbose_name='Código'
    )
    # Ex: OT-20250314-3F2A9C

    # Relacionamentos principais
    diagnostic = models.OneToOneField(
        'diagnostics.Diagnostic',
        on_delete=models.PROTECT,
        related_name='work_order',
        verbose_name='Diagnóstico'
    )

    vehicle = models.ForeignKey(
        'vehicles.Vehicle',
        on_delete=models.PROTECT,
        related_name='work_orders',
        verbose_name='Veículo'
    )

    assigned_to_employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='work_orders',
        verbose_name='Responsável'
    )

    status = models.CharField(
        max_length=20,
        choices=WorkOrderStatus.choices,
        default=WorkOrderStatus.PENDING,
        verbose_name='Status'
    )

    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.NORMAL,
        verbose_name='Prioridade'
    )

    # Dados do serviço
    description = models.TextField(
        verbose_name='Descrição do serviço'
    )

    notes = models.TextField(
        blank=True,
        verbose_name='Observações'
    )

    # Custos
    estimated_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name='Custo estimado'
    )

    actual_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name='Custo real'
    )

    # Datas operacionais (carimbadas pelo fluxo)
    start_date = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Início'
    )

    completed_date = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Conclusão'
    )

    validated_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Validada em'
    )

    validated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='validated_work_orders',
        verbose_name='Validada por'
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Ordem de trabalho'
        verbose_name_plural = 'Ordens de trabalho'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='workorder_status_idx'),
            models.Index(fields=['created_at'], name='workorder_created_idx'),
        ]

    def __str__(self):
        return self.code or str(self.id)

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = f'OT-{timezone.localdate():%Y%m%d}-{self.id.hex[:6].upper()}'
        super().save(*args, **kwargs)

    @property
    def is_open(self):
        return self.status != WorkOrderStatus.VALIDATED


class WorkOrderTask(models.Model):
    """Checklist de tarefas da ordem de trabalho."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    work_order = models.ForeignKey(
        WorkOrder,
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name='Ordem de trabalho'
    )
    title = models.CharField(max_length=150, verbose_name='Tarefa')
    description = models.TextField(blank=True, verbose_name='Descrição')
    is_done = models.BooleanField(default=False, verbose_name='Concluída')
    done_at = models.DateTimeField(null=True, blank=True, verbose_name='Concluída em')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Tarefa'
        verbose_name_plural = 'Tarefas'
        ordering = ['created_at']

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if self.is_done and self.done_at is None:
            self.done_at = timezone.now()
        elif not self.is_done:
            self.done_at = None
        super().save(*args, **kwargs)


class WorkOrderMaterial(models.Model):
    """
    Material solicitado para a ordem de trabalho.
    Ao ser aprovado, dá baixa no estoque quando vinculado a um item.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    work_order = models.ForeignKey(
        WorkOrder,
        on_delete=models.CASCADE,
        related_name='materials',
        verbose_name='Ordem de trabalho'
    )
    description = models.CharField(max_length=200, verbose_name='Descrição')
    inventory_item = models.ForeignKey(
        'inventory.InventoryItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='work_order_materials',
        verbose_name='Item de estoque'
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        verbose_name='Quantidade'
    )
    unit_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name='Custo unitário'
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_materials',
        verbose_name='Aprovado por'
    )
    approved_at = models.DateTimeField(null=True, blank=True, verbose_name='Aprovado em')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Material'
        verbose_name_plural = 'Materiais'
        ordering = ['created_at']

    def __str__(self):
        return f'{self.quantity}x {self.description}'

    @property
    def total_cost(self):
        if self.unit_cost is None:
            return None
        return self.unit_cost * self.quantity


class WorkOrderEvidence(models.Model):
    """Foto ou documento que comprova a execução do serviço."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    work_order = models.ForeignKey(
        WorkOrder,
        on_delete=models.CASCADE,
        related_name='evidence',
        verbose_name='Ordem de trabalho'
    )
    file_url = models.URLField(max_length=500, verbose_name='Arquivo')
    description = models.CharField(max_length=200, blank=True, verbose_name='Descrição')
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='work_order_evidence',
        verbose_name='Enviado por'
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Enviado em')

    class Meta:
        verbose_name = 'Evidência'
        verbose_name_plural = 'Evidências'
        ordering = ['-created_at']

    def __str__(self):
        return self.description or self.file_url
