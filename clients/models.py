# apps/clients/models.py

import uuid
import re
from django.db import models


class Client(models.Model):
    """
    Cliente dono (ou contratante) dos veículos da frota.
    """

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Ativo'),
        (STATUS_INACTIVE, 'Inativo'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=150, verbose_name='Nome')
    company = models.CharField(max_length=150, blank=True, verbose_name='Empresa')
    phone = models.CharField(max_length=20, verbose_name='Telefone')
    email = models.EmailField(verbose_name='E-mail')
    address = models.TextField(verbose_name='Endereço')
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
        verbose_name='Status'
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Atualizado em')

    class Meta:
        verbose_name = 'Cliente'
        verbose_name_plural = 'Clientes'
        ordering = ['name']

    def __str__(self):
        return self.company or self.name

    def save(self, *args, **kwargs):
        if self.phone:
            self.phone = re.sub(r'[^\d+]', '', self.phone)
        super().save(*args, **kwargs)


class ClientBranch(models.Model):
    """Sucursal de um cliente (ponto de operação dos veículos)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    client = models.ForeignKey(
        Client,
        on_delete=models.CASCADE,
        related_name='branches',
        verbose_name='Cliente'
    )
    name = models.CharField(max_length=150, verbose_name='Nome')
    address = models.TextField(verbose_name='Endereço')
    phone = models.CharField(max_length=20, blank=True, verbose_name='Telefone')
    contact_name = models.CharField(max_length=150, blank=True, verbose_name='Contato')
    is_active = models.BooleanField(default=True, verbose_name='Ativa')

    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Criado em')

    class Meta:
        verbose_name = 'Sucursal'
        verbose_name_plural = 'Sucursais'
        ordering = ['client__name', 'name']
        unique_together = [('client', 'name')]

    def __str__(self):
        return f'{self.client} - {self.name}'
