import logging

from django.db import transaction

from lifecycle.exceptions import ValidationError
from .models import InventoryItem, InventoryMovement, MovementType

logger = logging.getLogger(__name__)


def register_movement(item, movement_type, quantity, actor=None, reference='', notes=''):
    """
    Aplica uma movimentação de estoque e grava o registro correspondente.

    - ``in`` soma ao saldo
    - ``out`` subtrai, sem permitir saldo negativo
    - ``adjustment`` define o saldo absoluto (inventário físico)
    """
    if movement_type not in MovementType.values:
        raise ValidationError(
            'Tipo de movimentação inválido.',
            errors={'movement_type': [f'"{movement_type}" não é um tipo válido.']},
        )

    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        raise ValidationError('Quantidade inválida.', errors={'quantity': ['Informe um número inteiro.']})

    if quantity < 0 or (quantity == 0 and movement_type != MovementType.ADJUSTMENT):
        raise ValidationError('Quantidade inválida.', errors={'quantity': ['A quantidade deve ser positiva.']})

    with transaction.atomic():
        locked = InventoryItem.objects.select_for_update().get(pk=item.pk)

        if movement_type == MovementType.IN:
            new_quantity = locked.quantity + quantity
        elif movement_type == MovementType.OUT:
            if quantity > locked.quantity:
                raise ValidationError(
                    f'Estoque insuficiente para "{locked.name}".',
                    errors={'quantity': [f'Disponível: {locked.quantity}.']},
                    available=locked.quantity,
                )
            new_quantity = locked.quantity - quantity
        else:
            new_quantity = quantity

        locked.quantity = new_quantity
        locked.save(update_fields=['quantity', 'updated_at'])

        movement = InventoryMovement.objects.create(
            item=locked,
            movement_type=movement_type,
            quantity=quantity,
            balance_after=new_quantity,
            reference=reference or '',
            notes=notes or '',
            created_by=actor if actor is not None and actor.is_authenticated else None,
        )

    item.quantity = new_quantity
    logger.info(
        'Movimentação %s de %s em %s (saldo %s)',
        movement_type, quantity, locked.pk, new_quantity
    )
    return movement
