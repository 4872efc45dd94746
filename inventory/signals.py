from django.db.models.signals import pre_save, post_save
from django.dispatch import receiver

from notifications.models import NotificationKind
from notifications.services import notify
from .models import InventoryItem


@receiver(pre_save, sender=InventoryItem)
def cache_previous_quantity(sender, instance, **kwargs):
    if not instance.pk:
        instance._previous_quantity = None
        return

    instance._previous_quantity = (
        InventoryItem.objects.filter(pk=instance.pk)
        .values_list('quantity', flat=True)
        .first()
    )


@receiver(post_save, sender=InventoryItem)
def notify_low_stock(sender, instance, created, **kwargs):
    previous = getattr(instance, '_previous_quantity', None)
    if created or previous is None:
        return

    # Só avisa na travessia do mínimo, não a cada saída abaixo dele
    if previous > instance.min_quantity and instance.quantity <= instance.min_quantity:
        notify(
            NotificationKind.INVENTORY,
            'Estoque baixo',
            f'{instance} está com {instance.quantity} unidade(s); mínimo {instance.min_quantity}.',
        )
