"""
Taxonomia de erros do ciclo de manutenção.

Cada erro carrega o status HTTP e o código com que a API o expõe; o motor não
conhece a camada HTTP, apenas declara a categoria da falha.
"""


class LifecycleError(Exception):
    """Base de todos os erros de regra de negócio do ciclo de manutenção."""

    status_code = 400
    code = 'lifecycle_error'

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def as_dict(self):
        payload = {'error': self.code, 'detail': self.message}
        payload.update(self.context)
        return payload


class NotFound(LifecycleError):
    """Entidade referenciada não existe."""

    status_code = 404
    code = 'not_found'


class InvalidTransition(LifecycleError):
    """O status atual não permite a ação pedida. Não deve ser repetida."""

    status_code = 400
    code = 'invalid_transition'


class Forbidden(LifecycleError):
    """O usuário não tem o papel ou o vínculo exigido."""

    status_code = 403
    code = 'forbidden'


class ValidationError(LifecycleError):
    """Dados de entrada malformados."""

    status_code = 400
    code = 'validation_error'

    def __init__(self, message, errors=None, **context):
        if errors:
            context['errors'] = errors
        super().__init__(message, **context)
        self.errors = errors or {}


class StorageFailure(LifecycleError):
    """Falha de persistência; a transação inteira foi desfeita."""

    status_code = 500
    code = 'storage_failure'
