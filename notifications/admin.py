from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'kind', 'read', 'created_at')
    list_filter = ('kind', 'read')
    search_fields = ('title', 'message')
    readonly_fields = ('id', 'created_at')
