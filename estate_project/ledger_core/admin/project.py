from django.contrib import admin
from ledger_core.models import Project
from .inlines import FlatInline


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "project_name",
        "location",
        "status",
        "total_flats",
        "start_date",
        "target_sell",
    )
    list_filter = ("status",)
    search_fields = ("project_name", "location")
    inlines = [FlatInline]
