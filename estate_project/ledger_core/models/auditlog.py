from django.conf import settings
from django.db import models


# ---------- Audit / Event log ----------
class AuditLog(models.Model):
    # Nullable: automated actions (tasks, seed scripts) have no user
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    # create, update, delete, make_payment, ...
    action = models.CharField(max_length=50)
    # e.g. "Sale", "Expense", "OutflowTransaction"
    object_type = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    changes = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["object_type", "object_id"], name="auditlog_object_idx"),
            models.Index(fields=["created_at"], name="auditlog_created_idx"),
        ]

    def __str__(self):
        time = self.created_at
        return (f"[{time:%Y-%m-%d %H:%M}] {self.user} {self.action} "
                f"{self.object_type}({self.object_id})")
