from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """Usuários por papel; o papel define o que cada um pode fazer no ciclo."""

    fieldsets = (
        (None, {"fields": ("email", "password", "role")}),
        ("Identificação", {"fields": ("username", "first_name", "last_name")}),
        ("Acesso", {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
        ("Datas", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "role", "password1", "password2")}),
    )
    list_display = ("email", "full_name", "role", "employee_link", "is_active", "last_login")
    list_filter = ("role", "is_active")
    list_select_related = ("employee_profile",)
    ordering = ("email",)
    search_fields = ("email", "first_name", "last_name", "employee_profile__first_name")
    readonly_fields = ("last_login", "date_joined")
    actions = ("deactivate_users",)

    @admin.display(description="Nome")
    def full_name(self, obj):
        return obj.get_full_name() or "-"

    @admin.display(description="Funcionário")
    def employee_link(self, obj):
        employee = getattr(obj, "employee_profile", None)
        return employee.full_name if employee else "-"

    @admin.action(description="Desativar usuários selecionados")
    def deactivate_users(self, request, queryset):
        updated = queryset.exclude(pk=request.user.pk).update(is_active=False)
        self.message_user(request, f"{updated} usuário(s) desativado(s).")
