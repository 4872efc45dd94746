from django.contrib import admin
from .models import Provider, ProviderType


@admin.register(ProviderType)
class ProviderTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ('name', 'provider_type', 'email', 'phone', 'rating', 'status', 'created_at')
    list_filter = ('provider_type', 'status', 'created_at')
    search_fields = ('name', 'email', 'phone')
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('name',)

    fieldsets = (
        ('Dados', {
            'fields': ('name', 'provider_type', 'status')
        }),
        ('Contato', {
            'fields': ('phone', 'email', 'address')
        }),
        ('Avaliação', {
            'fields': ('rating',)
        }),
        ('Controle', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
