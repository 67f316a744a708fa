import logging

from django.core.exceptions import ValidationError

from ..exceptions import InvalidAmount
from ..models import Expense, ExpenseItem, OutflowTransaction, Project, Vendor
from ..signals import notify_ledger_changed
from .audit_helper import log_action, snapshot
from .counters import next_expense_number
from .store import atomic_write, fetch
from .validation import require_money

logger = logging.getLogger(__name__)

EXPENSE_FIELDS = {
    "vendor_id", "project_id", "item_id", "quantity", "price", "date",
    "description",
}


def create_expense(*, vendor_id, project_id, item_id, price, date,
                   quantity=None, description="", user=None) -> Expense:
    """Record a vendor bill. It gets the next expense number and
    starts Unpaid with nothing paid."""
    if not require_money(price, "price"):
        raise ValidationError("Price must be greater than 0.")

    with atomic_write():
        vendor = fetch(Vendor, vendor_id)
        project = fetch(Project, project_id)
        item = fetch(ExpenseItem, item_id)

        expense = Expense.objects.create(
            expense_number=next_expense_number(),
            vendor=vendor,
            project=project,
            item=item,
            quantity=quantity,
            price=price,
            paid_amount=0,
            status="Unpaid",
            date=date,
            description=description or "",
        )
        log_action(action="create", instance=expense, user=user,
                   changes=snapshot(expense))
        notify_ledger_changed("expenses", "create", expense)

    logger.info("expense %s recorded for %s", expense.expense_number, price)
    return expense


def update_expense(expense_id, *, user=None, **changes) -> Expense:
    """
    Edit an expense. The price cannot drop below what is already paid,
    and status is re-derived from the new price. The project can only
    change while no payments are linked.
    """
    unknown = set(changes) - EXPENSE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown expense fields: {sorted(unknown)}")

    with atomic_write():
        expense = fetch(Expense, expense_id, lock=True)

        if "price" in changes:
            price = changes["price"]
            if not require_money(price, "price"):
                raise ValidationError("Price must be greater than 0.")
            if price < expense.paid_amount:
                raise InvalidAmount(
                    f"Price cannot be lower than the paid amount "
                    f"{expense.paid_amount}.")

        if ("project_id" in changes
                and changes["project_id"] != expense.project_id):
            linked = OutflowTransaction.objects.filter(
                expense_number=expense.expense_number)
            if linked.exists():
                raise ValidationError(
                    "Cannot move an expense with payments to another project.")
            fetch(Project, changes["project_id"])
        if "vendor_id" in changes:
            fetch(Vendor, changes["vendor_id"])
        if "item_id" in changes:
            fetch(ExpenseItem, changes["item_id"])

        for field, value in changes.items():
            setattr(expense, field, value)
        expense.status = Expense.derive_status(expense.paid_amount, expense.price)
        expense.save()

        log_action(action="update", instance=expense, user=user,
                   changes=snapshot(expense))
        notify_ledger_changed("expenses", "update", expense)
    return expense


def delete_expense(expense_id, *, user=None):
    """Delete an expense that has no linked payments."""
    with atomic_write():
        expense = fetch(Expense, expense_id, lock=True)
        log_action(action="delete", instance=expense, user=user,
                   changes={"expense_number": expense.expense_number})
        # pre_delete receiver blocks expenses with payments
        expense.delete()
        notify_ledger_changed("expenses", "delete", expense)
    logger.info("expense %s deleted", expense.expense_number)
