import logging

from django.db import transaction

from clients.models import ClientBranch
from lifecycle.exceptions import Forbidden, NotFound, ValidationError
from lifecycle.services import lifecycle_action
from notifications.models import NotificationKind
from notifications.services import notify
from .models import Vehicle, VehicleBranchHistory

logger = logging.getLogger(__name__)


@lifecycle_action
def transfer_vehicle(vehicle_id, to_branch_id, reason, actor):
    """
    Move o veículo para outra sucursal e registra a transferência.

    A sucursal de destino precisa estar ativa e pertencer ao cliente do
    veículo; veículo sem cliente passa a ser do cliente da sucursal.
    """
    if not actor.can_supervise:
        raise Forbidden('Apenas administradores ou supervisores podem transferir veículos.')

    reason = (reason or '').strip()
    if not reason:
        raise ValidationError('Motivo obrigatório.', errors={'reason': ['Informe o motivo da transferência.']})

    with transaction.atomic():
        try:
            vehicle = Vehicle.objects.select_for_update().get(pk=vehicle_id)
        except Vehicle.DoesNotExist:
            raise NotFound('Veículo não encontrado.', id=str(vehicle_id))
        try:
            branch = ClientBranch.objects.get(pk=to_branch_id)
        except ClientBranch.DoesNotExist:
            raise NotFound('Sucursal não encontrada.', id=str(to_branch_id))

        if not branch.is_active:
            raise ValidationError('Sucursal inativa.', errors={'to_branch_id': ['A sucursal está inativa.']})
        if vehicle.branch_id == branch.pk:
            raise ValidationError(
                'O veículo já está nesta sucursal.',
                errors={'to_branch_id': ['Escolha uma sucursal diferente da atual.']},
            )
        if vehicle.client_id is not None and branch.client_id != vehicle.client_id:
            raise ValidationError(
                'A sucursal não pertence ao cliente do veículo.',
                errors={'to_branch_id': ['A sucursal não pertence ao cliente do veículo.']},
            )

        from_branch = vehicle.branch
        vehicle.branch = branch
        vehicle.client_id = branch.client_id
        vehicle.save(update_fields=['branch', 'client', 'updated_at'])

        entry = VehicleBranchHistory.objects.create(
            vehicle=vehicle,
            from_branch=from_branch,
            to_branch=branch,
            reason=reason,
            transferred_by=actor,
        )

        notify(
            NotificationKind.VEHICLE,
            'Veículo transferido',
            f'{vehicle} transferido para {branch.name}.',
        )

    logger.info('Veículo %s transferido de %s para %s por %s', vehicle.pk, from_branch and from_branch.pk, branch.pk, actor.pk)
    return vehicle, entry
