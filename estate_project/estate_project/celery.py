import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "estate_project.settings")

celery_app = Celery("estate_project")

# CELERY_* keys in Django settings
celery_app.config_from_object("django.conf:settings", namespace="CELERY")
celery_app.autodiscover_tasks()

# Nightly read-only consistency checks of the ledger
celery_app.conf.beat_schedule = {
    "audit-expense-balances": {
        "task": "ledger_core.tasks.audit_expense_balances",
        "schedule": crontab(hour=2, minute=0),
    },
    "audit-flat-statuses": {
        "task": "ledger_core.tasks.audit_flat_statuses",
        "schedule": crontab(hour=2, minute=15),
    },
}
