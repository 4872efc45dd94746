import logging

from django.db import transaction
from django.utils import timezone

from inventory.models import MovementType
from inventory.services import register_movement
from lifecycle.exceptions import Forbidden, InvalidTransition
from lifecycle.services import ensure_work_order_editable, lifecycle_action
from .models import WorkOrderMaterial

logger = logging.getLogger(__name__)


@lifecycle_action
def approve_material(material, actor):
    """
    Aprova um material solicitado. Se houver item de estoque vinculado, a
    saída é registrada na mesma transação; sem saldo, nada é aprovado.
    """
    if not actor.can_supervise:
        raise Forbidden('Apenas supervisores podem aprovar materiais.')

    with transaction.atomic():
        locked = WorkOrderMaterial.objects.select_for_update().get(pk=material.pk)
        ensure_work_order_editable(locked.work_order)

        if locked.approved_at is not None:
            raise InvalidTransition('Material já aprovado.', material_id=str(locked.pk))

        if locked.inventory_item is not None:
            register_movement(
                locked.inventory_item,
                MovementType.OUT,
                locked.quantity,
                actor,
                reference=f'OT {locked.work_order.code}',
                notes=locked.description,
            )
            if locked.unit_cost is None:
                locked.unit_cost = locked.inventory_item.unit_price

        locked.approved_by = actor
        locked.approved_at = timezone.now()
        locked.save(update_fields=['approved_by', 'approved_at', 'unit_cost'])

    logger.info('Material %s aprovado para OT %s', locked.pk, locked.work_order.code)
    return locked
