from django.contrib import admin
from apps.core.admin import ReadOnlyAdminMixin
from .models import QuotaWindow


@admin.register(QuotaWindow)
class QuotaWindowAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['lifter', 'week_start', 'quota', 'used']
    list_filter = ['week_start']
    search_fields = ['lifter__user__username']
    readonly_fields = ['id', 'lifter', 'week_start', 'week_end', 'quota', 'used']
