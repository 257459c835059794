from django.contrib import admin
from apps.core.admin import ReadOnlyAdminMixin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ['user', 'role', 'experience_level', 'weekly_quota', 'status', 'joined_at']
    list_filter = ['role', 'experience_level', 'status']
    search_fields = ['user__username', 'user__email', 'user__first_name', 'user__last_name']
    readonly_fields = ['id', 'user', 'role', 'experience_level', 'weekly_quota', 'status', 'joined_at']
