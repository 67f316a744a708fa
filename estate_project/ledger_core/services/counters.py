from django.conf import settings
from django.db import transaction

from ..models import Counter


def next_value(name: str, start: int = 1) -> int:
    """
    Bump and return the named sequence.
    The first call returns ``start``. The counter row stays locked
    until the caller's transaction ends, so two callers never get
    the same value.
    """
    with transaction.atomic():
        counter, created = Counter.objects.select_for_update().get_or_create(
            name=name, defaults={"current": start}
        )
        if created:
            return counter.current
        counter.current += 1
        counter.save(update_fields=["current"])
        return counter.current


def next_expense_number() -> str:
    """EXID-0100, EXID-0101, ..."""
    prefix = getattr(settings, "LEDGER_EXPENSE_NUMBER_PREFIX", "EXID-")
    start = getattr(settings, "LEDGER_EXPENSE_NUMBER_START", 100)
    return f"{prefix}{next_value('expense', start=start):04d}"


def next_receipt_number() -> str:
    """RCPT-000001, RCPT-000002, ..."""
    prefix = getattr(settings, "LEDGER_RECEIPT_NUMBER_PREFIX", "RCPT-")
    return f"{prefix}{next_value('receipt'):06d}"
