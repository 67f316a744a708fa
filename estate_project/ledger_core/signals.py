import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models.signals import pre_delete
from django.dispatch import Signal, receiver

from .models import Expense, Flat, OutflowTransaction

logger = logging.getLogger(__name__)

# Sent once per changed record after the surrounding transaction commits.
# Receivers get: collection ("sales", "expenses", "outflowTransactions", ...),
# action ("create", "update", "delete") and instance.
ledger_changed = Signal()


def notify_ledger_changed(collection, action, instance):
    """Announce a change to subscribers once the current transaction commits.

    Rolled-back work is never announced. Outside a transaction the
    signal is sent right away.
    """
    def send():
        ledger_changed.send(
            sender=instance.__class__,
            collection=collection,
            action=action,
            instance=instance,
        )

    transaction.on_commit(send)


""" Block deleting a flat that is sold."""


@receiver(pre_delete, sender=Flat)
def prevent_delete_sold_flat(sender, instance, **kwargs):
    if instance.status == "Sold":
        raise ValidationError(
            f"Cannot delete flat {instance.flat_number}: it is sold.")


"""Block expense deletion while payments are linked to it."""


@receiver(pre_delete, sender=Expense)
def prevent_delete_expense_with_payments(sender, instance, **kwargs):
    linked = OutflowTransaction.objects.filter(
        expense_number=instance.expense_number)
    if linked.exists():
        raise ValidationError(
            f"Cannot delete expense {instance.expense_number} "
            "with linked payments.")


@receiver(ledger_changed)
def log_ledger_change(sender, collection, action, instance, **kwargs):
    logger.debug("ledger change: %s %s %s", action, collection, instance.pk)
