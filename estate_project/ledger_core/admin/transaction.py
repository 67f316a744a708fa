from django.contrib import admin
from ledger_core.models import InflowTransaction, OutflowTransaction
from .readonly import ReadOnlyAdmin


@admin.register(InflowTransaction)
class InflowTransactionAdmin(admin.ModelAdmin):
    list_display = (
        "receipt_number",
        "date",
        "project",
        "flat",
        "customer",
        "payment_type",
        "amount",
        "payment_method",
    )
    list_filter = ("project", "payment_type", "payment_method")
    search_fields = ("receipt_number", "customer__full_name")

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("project", "flat", "customer")


# Linked outflows move Expense.paid_amount; edits go through services.payments
@admin.register(OutflowTransaction)
class OutflowTransactionAdmin(ReadOnlyAdmin):
    list_display = (
        "id",
        "date",
        "project",
        "supplier_vendor",
        "expense_number",
        "amount",
        "payment_method",
    )
    list_filter = ("project", "expense_category")
    search_fields = ("expense_number", "supplier_vendor")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("project")
