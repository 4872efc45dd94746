from .models import Notification


def notify(kind, title, message):
    """Registra uma notificação; deve ser chamada dentro da transação do evento."""
    return Notification.objects.create(kind=kind, title=title, message=message)


def mark_all_read():
    return Notification.objects.filter(read=False).update(read=True)
