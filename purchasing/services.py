"""
Fluxo das cotações de compra.

Rascunho aceita edição de itens; enviada aguarda decisão do fornecedor.
Aceitar uma cotação ligada a uma OT lança os itens como materiais da OT.
"""
import logging

from django.db import transaction
from django.utils import timezone

from lifecycle.exceptions import Forbidden, InvalidTransition, NotFound, ValidationError
from lifecycle.services import ensure_work_order_editable, lifecycle_action
from workorder.models import WorkOrderMaterial
from .models import PurchaseQuote, QuoteStatus

logger = logging.getLogger(__name__)


QUOTE_TRANSITIONS = {
    QuoteStatus.DRAFT: {QuoteStatus.SENT},
    QuoteStatus.SENT: {QuoteStatus.ACCEPTED, QuoteStatus.REJECTED, QuoteStatus.EXPIRED},
    QuoteStatus.ACCEPTED: set(),
    QuoteStatus.REJECTED: set(),
    QuoteStatus.EXPIRED: set(),
}


def ensure_quote_editable(quote):
    if quote.status != QuoteStatus.DRAFT:
        raise InvalidTransition(
            f'Cotação {quote.quote_number} só pode ser alterada em rascunho.',
            current_status=quote.status,
        )


def lock_editable_quote(quote_id):
    """Trava a cotação para alterar itens; precisa estar em rascunho."""
    try:
        quote = PurchaseQuote.objects.select_for_update().get(pk=quote_id)
    except PurchaseQuote.DoesNotExist:
        raise NotFound('Cotação não encontrada.', id=str(quote_id))
    ensure_quote_editable(quote)
    return quote


@lifecycle_action
def change_quote_status(quote_id, target_status, actor):
    if not actor.can_supervise:
        raise Forbidden('Apenas administradores ou supervisores podem decidir cotações.')
    if target_status not in QuoteStatus.values:
        raise ValidationError(
            'Status de cotação desconhecido.',
            errors={'status': [f'Use um de: {", ".join(QuoteStatus.values)}.']},
        )

    with transaction.atomic():
        try:
            quote = PurchaseQuote.objects.select_for_update().get(pk=quote_id)
        except PurchaseQuote.DoesNotExist:
            raise NotFound('Cotação não encontrada.', id=str(quote_id))

        allowed = QUOTE_TRANSITIONS[quote.status]
        if target_status not in allowed:
            raise InvalidTransition(
                f'Cotação {quote.status} não pode ir para {target_status}.',
                current_status=quote.status,
                allowed=sorted(allowed),
            )

        if target_status == QuoteStatus.SENT and not quote.items.exists():
            raise ValidationError('Cotação sem itens.', errors={'items': ['Inclua ao menos um item.']})
        if target_status == QuoteStatus.ACCEPTED:
            if quote.is_expired():
                raise InvalidTransition(
                    f'Cotação {quote.quote_number} venceu em {quote.expiration_date}.',
                    current_status=quote.status,
                )
            if quote.work_order_id is not None:
                _add_materials(quote)

        quote.status = target_status
        if target_status != QuoteStatus.SENT:
            quote.decided_by = actor
            quote.decided_at = timezone.now()
        quote.save(update_fields=['status', 'decided_by', 'decided_at', 'updated_at'])

    logger.info('Cotação %s -> %s por %s', quote.quote_number, target_status, actor.pk)
    return quote


def _add_materials(quote):
    work_order = quote.work_order
    ensure_work_order_editable(work_order)
    WorkOrderMaterial.objects.bulk_create([
        WorkOrderMaterial(
            work_order=work_order,
            description=item.description,
            inventory_item=item.inventory_item,
            quantity=item.quantity,
            unit_cost=item.unit_price,
        )
        for item in quote.items.select_related('inventory_item')
    ])


@lifecycle_action
def expire_overdue_quotes(actor, today=None):
    """Marca como expiradas as cotações enviadas com validade vencida."""
    if not actor.can_supervise:
        raise Forbidden('Apenas administradores ou supervisores podem decidir cotações.')
    today = today or timezone.localdate()
    now = timezone.now()
    count = PurchaseQuote.objects.filter(
        status=QuoteStatus.SENT,
        expiration_date__lt=today,
    ).update(status=QuoteStatus.EXPIRED, decided_by=actor, decided_at=now, updated_at=now)
    if count:
        logger.info('%s cotação(ões) expirada(s)', count)
    return count
