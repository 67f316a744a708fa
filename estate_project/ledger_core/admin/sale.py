from django.contrib import admin
from ledger_core.models import Customer, Sale
from .inlines import SaleExtraCostInline
from .readonly import ReadOnlyAdmin


# Sales change flat status and the inflow log, so they are
# only written through services.sales
@admin.register(Sale)
class SaleAdmin(ReadOnlyAdmin):
    list_display = (
        "id",
        "sale_date",
        "project",
        "flat",
        "customer",
        "base_price",
        "total_price",
        "downpayment",
    )
    list_filter = ("project", "sale_date")
    search_fields = ("customer__full_name", "flat__flat_number")
    inlines = [SaleExtraCostInline]

    # Fetch everything in one SQL join
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("project", "flat", "customer")


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "mobile", "nid_number")
    search_fields = ("full_name", "mobile", "nid_number")
