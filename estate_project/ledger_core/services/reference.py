from django.core.exceptions import ValidationError

from ..models import ExpenseItem, OperatingCost, OperatingCostItem
from ..signals import notify_ledger_changed
from .store import atomic_write, fetch
from .validation import require_amount


OPERATING_COST_FIELDS = {"item_id", "amount", "date", "description", "reference"}


# Reference lists. Plain creates, no reconciliation.
def add_expense_item(name) -> ExpenseItem:
    item, _ = ExpenseItem.objects.get_or_create(name=name.strip())
    return item


def add_operating_cost_item(name) -> OperatingCostItem:
    item, _ = OperatingCostItem.objects.get_or_create(name=name.strip())
    return item


# ---------- Operating costs ----------
def record_operating_cost(*, item_id, amount, date, description="",
                          reference="") -> OperatingCost:
    require_amount(amount, "Operating cost amount")
    with atomic_write():
        cost = OperatingCost.objects.create(
            item=fetch(OperatingCostItem, item_id),
            amount=amount,
            date=date,
            description=description,
            reference=reference,
        )
        notify_ledger_changed("operatingCosts", "create", cost)
    return cost


def update_operating_cost(cost_id, **changes) -> OperatingCost:
    unknown = set(changes) - OPERATING_COST_FIELDS
    if unknown:
        raise ValidationError(f"Unknown operating cost fields: {sorted(unknown)}")
    if "amount" in changes:
        require_amount(changes["amount"], "Operating cost amount")
    with atomic_write():
        cost = fetch(OperatingCost, cost_id, lock=True)
        if "item_id" in changes:
            fetch(OperatingCostItem, changes["item_id"])
        for field, value in changes.items():
            setattr(cost, field, value)
        cost.save()
        notify_ledger_changed("operatingCosts", "update", cost)
    return cost


def delete_operating_cost(cost_id):
    with atomic_write():
        cost = fetch(OperatingCost, cost_id)
        cost.delete()
        notify_ledger_changed("operatingCosts", "delete", cost)
