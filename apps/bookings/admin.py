from django.contrib import admin
from apps.core.admin import ReadOnlyAdminMixin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['id_short', 'lifter', 'slot', 'level', 'status', 'created_at', 'canceled_at']
    list_filter = ['status', 'level']
    search_fields = ['lifter__user__username', 'lifter__user__email']
    readonly_fields = [
        'id', 'lifter', 'slot', 'level', 'status',
        'canceled_at', 'cancel_reason', 'created_at', 'updated_at',
    ]
    date_hierarchy = 'created_at'

    @admin.display(description='Booking')
    def id_short(self, obj):
        return obj.id_short
