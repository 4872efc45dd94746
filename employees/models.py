import uuid
from django.db import models
from django.conf import settings


class EmployeeType(models.Model):
    """Ex: Mecânico, Eletricista, Supervisor de oficina."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=80, unique=True, verbose_name='Nome')
    description = models.TextField(blank=True, verbose_name='Descrição')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Tipo de funcionário'
        verbose_name_plural = 'Tipos de funcionário'
        ordering = ['name']

    def __str__(self):
        return self.name


class Employee(models.Model):
    """
    Funcionário da oficina que recebe reportes e executa ordens de trabalho.

    O vínculo com ``User`` é opcional: é ele que permite ao técnico autenticado
    registrar diagnósticos dos reportes atribuídos a ele.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    first_name = models.CharField(max_length=80, verbose_name='Nome')
    last_name = models.CharField(max_length=80, verbose_name='Sobrenome')
    employee_type = models.ForeignKey(
        EmployeeType,
        on_delete=models.PROTECT,
        related_name='employees',
        verbose_name='Tipo'
    )
    phone = models.CharField(max_length=20, blank=True, verbose_name='Telefone')
    email = models.EmailField(blank=True, verbose_name='E-mail')
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employee_profile',
        verbose_name='Usuário'
    )
    is_active = models.BooleanField(default=True, verbose_name='Ativo')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Funcionário'
        verbose_name_plural = 'Funcionários'
        ordering = ['first_name', 'last_name']

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()
