"""
Admin mixins.

Domain rows are mutated only through the service modules, which validate,
lock and audit every change; the admin site is a read-only window on them.
"""


class ReadOnlyAdminMixin:
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
