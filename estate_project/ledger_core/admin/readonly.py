from django.contrib import admin
from django.core.exceptions import PermissionDenied

"""Rows written only by the ledger services (sales, outflows, audit log).
Shown in the admin for lookup, never edited there."""
class ReadOnlyAdmin(admin.ModelAdmin):
    list_per_page = 50

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return True

    def save_model(self, request, obj, form, change):
        raise PermissionDenied(
            f"{self.model.__name__} rows are written by the ledger services.")

    def get_actions(self, request):
        return {}

    # Filter on the ledger's foreign keys when the model has them
    def get_list_filter(self, request):
        if self.list_filter:
            return self.list_filter
        names = {f.name for f in self.model._meta.fields}
        return tuple(n for n in ("project", "payment_method", "status")
                     if n in names)
