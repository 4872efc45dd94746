from django.contrib import admin
from .models import Client, ClientBranch


class ClientBranchInline(admin.TabularInline):
    model = ClientBranch
    extra = 0
    fields = ('name', 'address', 'phone', 'contact_name', 'is_active')


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ('name', 'company', 'email', 'phone', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('name', 'company', 'email', 'phone')
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('name',)
    inlines = [ClientBranchInline]


@admin.register(ClientBranch)
class ClientBranchAdmin(admin.ModelAdmin):
    list_display = ('name', 'client', 'contact_name', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name', 'client__name', 'contact_name')
