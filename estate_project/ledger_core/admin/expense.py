from django.contrib import admin
from ledger_core.models import (Expense, ExpenseItem, OperatingCost,
                                OperatingCostItem, Vendor)
from ledger_core.services.counters import next_expense_number


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = (
        "expense_number",
        "date",
        "vendor",
        "project",
        "item",
        "price",
        "paid_amount",
        "status",
    )
    list_filter = ("status", "project")
    search_fields = ("expense_number", "vendor__vendor_name")
    # Only payments move these
    readonly_fields = ("expense_number", "paid_amount", "status")

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("vendor", "project", "item")

    def save_model(self, request, obj, form, change):
        if not obj.pk:
            obj.expense_number = next_expense_number()
        super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None):
        if obj and obj.paid_amount > 0:
            return False
        return super().has_delete_permission(request, obj)


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ("id", "vendor_name", "enterprise_name", "phone_number")
    search_fields = ("vendor_name", "enterprise_name")


@admin.register(ExpenseItem)
class ExpenseItemAdmin(admin.ModelAdmin):
    search_fields = ("name",)


@admin.register(OperatingCostItem)
class OperatingCostItemAdmin(admin.ModelAdmin):
    search_fields = ("name",)


@admin.register(OperatingCost)
class OperatingCostAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "item", "amount", "reference")
    list_filter = ("item", "date")
