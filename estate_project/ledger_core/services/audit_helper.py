from django.forms.models import model_to_dict

from ..models import AuditLog


def log_action(*, action: str, instance, user=None, changes: dict | None = None):
    """
    Central audit logger.
    Call inside the same atomic block as the write it records.
    """
    AuditLog.objects.create(
        user=user,
        action=action,
        object_type=instance.__class__.__name__,
        object_id=str(instance.pk),
        changes=changes,
    )


def snapshot(instance, fields=None) -> dict:
    """JSON-safe dict of a model instance for AuditLog.changes."""
    data = model_to_dict(instance, fields=fields)
    return {key: (value if isinstance(value, (int, bool, type(None))) else str(value))
            for key, value in data.items()}
