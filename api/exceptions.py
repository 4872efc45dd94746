"""
Handler de exceções da API.

Erros do ciclo de manutenção viram ``{"error": código, "detail": mensagem, ...}``
com o status HTTP da categoria; o restante segue o handler padrão do DRF.
"""
import logging

from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from lifecycle.exceptions import LifecycleError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    if isinstance(exc, LifecycleError):
        if exc.status_code >= 500:
            logger.error('Erro interno na view %s: %s', context.get('view'), exc.message)
        return Response(exc.as_dict(), status=exc.status_code)

    if isinstance(exc, ProtectedError):
        related = sorted({str(obj._meta.verbose_name_plural) for obj in exc.protected_objects})
        return Response(
            {
                'error': 'protected',
                'detail': 'Registro em uso e não pode ser removido.',
                'related': related,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    return exception_handler(exc, context)
