from django.contrib import admin
from apps.core.admin import ReadOnlyAdminMixin
from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['at', 'action', 'entity', 'entity_id', 'actor']
    list_filter = ['action', 'entity']
    search_fields = ['entity_id', 'actor__username']
    readonly_fields = ['id', 'actor', 'action', 'entity', 'entity_id', 'payload', 'at']
    date_hierarchy = 'at'
