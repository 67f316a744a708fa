import logging

from django.core.exceptions import ValidationError

from ..models import Customer, Flat, InflowTransaction, Project, Sale
from ..signals import notify_ledger_changed
from .audit_helper import log_action
from .counters import next_receipt_number
from .store import atomic_write, fetch
from .validation import require_amount

logger = logging.getLogger(__name__)

INFLOW_FIELDS = {
    "amount", "date", "payment_method", "payment_type", "payment_purpose",
    "other_purpose", "receipt_number", "reference",
}


def record_inflow_payment(*, project_id, flat_id, customer_id, amount, date,
                          payment_method="Cash", payment_type="Installment",
                          payment_purpose="Installment", other_purpose="",
                          receipt_number=None, reference="", user=None):
    """
    Record money received from a customer for a flat they bought.
    A receipt number is generated when none is given.
    """
    require_amount(amount, "Payment amount")

    with atomic_write():
        project = fetch(Project, project_id)
        flat = fetch(Flat, flat_id, project=project)
        customer = fetch(Customer, customer_id)

        # Only the buyer of the flat pays against it
        if not Sale.objects.filter(flat=flat, customer=customer).exists():
            raise ValidationError(
                f"{customer.full_name} has no sale for flat {flat.flat_number}.")

        inflow = InflowTransaction.objects.create(
            project=project,
            flat=flat,
            customer=customer,
            amount=amount,
            date=date,
            payment_method=payment_method,
            payment_type=payment_type,
            payment_purpose=payment_purpose,
            other_purpose=other_purpose or "",
            receipt_number=receipt_number or next_receipt_number(),
            reference=reference or "",
        )
        log_action(action="create", instance=inflow, user=user,
                   changes={"amount": amount, "receipt": inflow.receipt_number})
        notify_ledger_changed("inflowTransactions", "create", inflow)

    logger.info("inflow %s of %s recorded for flat %s", inflow.receipt_number,
                amount, flat.pk)
    return inflow


def edit_inflow_payment(inflow_id, *, user=None, **changes):
    """Edit an inflow's amount or details."""
    unknown = set(changes) - INFLOW_FIELDS
    if unknown:
        raise ValidationError(f"Unknown payment fields: {sorted(unknown)}")
    if "amount" in changes:
        require_amount(changes["amount"], "Payment amount")

    with atomic_write():
        inflow = fetch(InflowTransaction, inflow_id, lock=True)
        for field, value in changes.items():
            setattr(inflow, field, value)
        inflow.save()
        log_action(action="update", instance=inflow, user=user,
                   changes={k: str(v) for k, v in changes.items()})
        notify_ledger_changed("inflowTransactions", "update", inflow)
    return inflow


def delete_inflow_payment(inflow_id, *, user=None):
    with atomic_write():
        inflow = fetch(InflowTransaction, inflow_id, lock=True)
        log_action(action="delete", instance=inflow, user=user,
                   changes={"amount": inflow.amount})
        inflow.delete()
        notify_ledger_changed("inflowTransactions", "delete", inflow)
