from django.contrib import admin
from apps.core.admin import ReadOnlyAdminMixin
from .models import Policy


@admin.register(Policy)
class PolicyAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['key', 'value', 'updated_at']
    search_fields = ['key']
    readonly_fields = ['id', 'key', 'value', 'updated_at']
