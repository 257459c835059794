from django.contrib import admin
from apps.core.admin import ReadOnlyAdminMixin
from .models import Slot


@admin.register(Slot)
class SlotAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['starts_at', 'ends_at', 'status', 'capacity_total', 'capacity_exp', 'capacity_inexp', 'tz']
    list_filter = ['status', 'tz']
    readonly_fields = [
        'id', 'starts_at', 'ends_at', 'tz', 'capacity_total', 'capacity_exp',
        'capacity_inexp', 'status', 'created_by', 'created_at', 'updated_at',
    ]
    date_hierarchy = 'starts_at'
