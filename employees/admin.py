from django.contrib import admin
from .models import Employee, EmployeeType


@admin.register(EmployeeType)
class EmployeeTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ('first_name', 'last_name', 'employee_type', 'email', 'phone', 'user', 'is_active')
    list_filter = ('employee_type', 'is_active')
    search_fields = ('first_name', 'last_name', 'email', 'user__email')
    autocomplete_fields = ['user']
