import datetime
import logging

from ..exceptions import InvalidAmount, NotAssociated, NotFound
from ..models import Expense, OutflowTransaction, Project
from ..signals import notify_ledger_changed
from .audit_helper import log_action
from .store import atomic_write, fetch
from .validation import require_amount

logger = logging.getLogger(__name__)


def _check_positive(amount):
    require_amount(amount, "Payment amount")


def _lock_expense_by_number(expense_number):
    """Lock the expense a payment points at through its expense number."""
    try:
        return Expense.objects.select_for_update().by_number(expense_number)
    except Expense.DoesNotExist:
        raise NotFound(f"Expense with ID {expense_number} not found.") from None


def _set_paid_amount(expense, paid_amount):
    expense.paid_amount = paid_amount
    expense.status = Expense.derive_status(paid_amount, expense.price)
    expense.save(update_fields=["paid_amount", "status"])


# ---------------------------------
# Expense payment workflows
# ---------------------------------
def make_payment(expense_id: int, *, amount_to_pay: int,
                 payment_date: datetime.date, payment_method: str = "Cash",
                 reference: str = "", expense_category: str = "Material",
                 user=None) -> tuple[Expense, OutflowTransaction]:
    """
    Pay part (or all) of an expense.
    Locks the expense row, raises its paid amount and status, and
    records the matching outflow under the expense's project.
    Returns (expense, outflow).
    """
    _check_positive(amount_to_pay)

    with atomic_write():
        expense = fetch(Expense, expense_id, lock=True)

        new_paid_amount = expense.paid_amount + amount_to_pay
        if new_paid_amount > expense.price:
            logger.warning(
                "payment of %s rejected for %s: paid %s of %s",
                amount_to_pay, expense.expense_number,
                expense.paid_amount, expense.price)
            raise InvalidAmount(
                "Payment cannot exceed the total expense price.")

        _set_paid_amount(expense, new_paid_amount)

        outflow = OutflowTransaction.objects.create(
            project_id=expense.project_id,
            amount=amount_to_pay,
            date=payment_date,
            expense_category=expense_category,
            supplier_vendor=expense.vendor.vendor_name,
            expense_number=expense.expense_number,
            description=f"Payment for {expense.expense_number}",
            payment_method=payment_method,
            reference=reference or "",
        )

        log_action(
            action="make_payment",
            instance=outflow,
            user=user,
            changes={
                "expense_number": expense.expense_number,
                "amount": amount_to_pay,
                "paid_amount": expense.paid_amount,
                "status": expense.status,
            },
        )
        notify_ledger_changed("expenses", "update", expense)
        notify_ledger_changed("outflowTransactions", "create", outflow)

    logger.info("paid %s on %s (%s/%s, %s)", amount_to_pay,
                expense.expense_number, expense.paid_amount, expense.price,
                expense.status)
    return expense, outflow


def edit_payment(outflow_id: int, *, amount: int, date: datetime.date,
                 payment_method: str | None = None, reference: str | None = None,
                 description: str | None = None,
                 user=None) -> OutflowTransaction:
    """
    Change an outflow's amount or details.
    For a linked outflow the expense's paid amount moves by the
    difference; the expense and the outflow are locked and written
    together. Returns the updated outflow.
    """
    _check_positive(amount)

    with atomic_write():
        outflow = fetch(OutflowTransaction, outflow_id, lock=True)
        old_amount = outflow.amount

        expense = None
        if outflow.expense_number:
            expense = _lock_expense_by_number(outflow.expense_number)
            new_paid_amount = expense.paid_amount + (amount - old_amount)
            if new_paid_amount > expense.price:
                logger.warning(
                    "payment %s edit rejected: %s would exceed %s",
                    outflow.pk, new_paid_amount, expense.price)
                raise InvalidAmount(
                    "Payment cannot exceed the total expense price.")
            if new_paid_amount < 0:
                logger.warning(
                    "payment %s edit rejected: paid amount would be %s",
                    outflow.pk, new_paid_amount)
                raise InvalidAmount("Paid amount cannot go below 0.")
            _set_paid_amount(expense, new_paid_amount)

        outflow.amount = amount
        outflow.date = date
        if payment_method is not None:
            outflow.payment_method = payment_method
        if reference is not None:
            outflow.reference = reference
        if description is not None:
            outflow.description = description
        outflow.save()

        log_action(
            action="edit_payment",
            instance=outflow,
            user=user,
            changes={
                "old_amount": old_amount,
                "amount": amount,
                "expense_number": outflow.expense_number or None,
            },
        )
        notify_ledger_changed("outflowTransactions", "update", outflow)
        if expense is not None:
            notify_ledger_changed("expenses", "update", expense)

    logger.info("payment %s changed from %s to %s", outflow.pk, old_amount,
                amount)
    return outflow


def delete_payment(outflow_id: int, *, user=None) -> Expense | None:
    """
    Delete an outflow.
    A linked outflow is reversed first: the expense's paid amount
    drops by the outflow amount (never below 0) and its status is
    re-derived, in the same atomic write as the delete. Returns the
    expense that was reversed, or None for a standalone outflow.
    """
    with atomic_write():
        outflow = fetch(OutflowTransaction, outflow_id, lock=True)
        outflow_pk = outflow.pk

        if not outflow.expense_number:
            if outflow.project_id is None:
                logger.warning("payment %s not associated with a project",
                               outflow_pk)
                raise NotAssociated(
                    "This payment is not associated with a project.")
            log_action(action="delete", instance=outflow, user=user,
                       changes={"amount": outflow.amount})
            outflow.delete()
            notify_ledger_changed("outflowTransactions", "delete", outflow)
            logger.info("standalone payment %s deleted", outflow_pk)
            return None

        expense = _lock_expense_by_number(outflow.expense_number)
        _set_paid_amount(expense, max(0, expense.paid_amount - outflow.amount))

        log_action(
            action="delete_payment",
            instance=outflow,
            user=user,
            changes={
                "expense_number": expense.expense_number,
                "amount": outflow.amount,
                "paid_amount": expense.paid_amount,
                "status": expense.status,
            },
        )
        outflow.delete()
        notify_ledger_changed("outflowTransactions", "delete", outflow)
        notify_ledger_changed("expenses", "update", expense)

    logger.info("payment %s reversed on %s (%s/%s)", outflow_pk,
                expense.expense_number, expense.paid_amount, expense.price)
    return expense


# ---------------------------------
# Standalone outflows
# ---------------------------------
def record_outflow(*, amount: int, date: datetime.date,
                   project_id: int | None = None, expense_category: str = "Office",
                   supplier_vendor: str = "", payment_method: str = "Cash",
                   reference: str = "", description: str = "",
                   user=None) -> OutflowTransaction:
    """Record an outflow not tied to any expense. Without a project it
    is a general (office) cost."""
    _check_positive(amount)
    with atomic_write():
        project = fetch(Project, project_id) if project_id is not None else None
        outflow = OutflowTransaction.objects.create(
            project=project,
            amount=amount,
            date=date,
            expense_category=expense_category,
            supplier_vendor=supplier_vendor,
            payment_method=payment_method,
            reference=reference,
            description=description,
        )
        log_action(action="create", instance=outflow, user=user,
                   changes={"amount": amount})
        notify_ledger_changed("outflowTransactions", "create", outflow)
    return outflow
