from django.contrib import admin
from ledger_core.models import AuditLog
from .readonly import ReadOnlyAdmin


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ("created_at", "user", "action", "object_type", "object_id")
    list_filter = ("action", "object_type")
    search_fields = ("object_id",)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user")
