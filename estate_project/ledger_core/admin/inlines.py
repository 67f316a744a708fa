from django.contrib import admin
from ledger_core.models import Flat, SaleExtraCost


class FlatInline(admin.TabularInline):
    model = Flat
    extra = 0
    fields = ("flat_number", "flat_size", "ownership", "status")
    # status only moves through sales
    readonly_fields = ("status",)


class SaleExtraCostInline(admin.TabularInline):
    model = SaleExtraCost
    extra = 0
    fields = ("position", "purpose", "amount")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False
