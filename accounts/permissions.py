"""
Permissões DRF centralizadas para controle de acesso baseado em roles.

As regras de negócio do ciclo de manutenção checam as capacidades do usuário
dentro do próprio motor (lifecycle); estas classes cobrem apenas o CRUD.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdministratorOrReadOnly(BasePermission):
    """
    Leitura para qualquer usuário autenticado, escrita apenas para Administrador.
    """
    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.is_administrator


class IsSupervisorOrReadOnly(BasePermission):
    """
    Admin ou Supervisor - Para cadastros da frota.

    Controla escrita em:
    - Veículos, Clientes, Funcionários, Fornecedores
    - Estoque e Manutenção programada
    """
    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.can_supervise
