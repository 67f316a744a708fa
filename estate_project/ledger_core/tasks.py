import logging

from celery import shared_task
from django.db.models import Count, Sum

logger = logging.getLogger(__name__)


@shared_task  # register this function as a Celery task
def audit_expense_balances():
    """
    Recompute every expense's paid amount from its linked outflows and
    report the ones whose stored paid_amount or status drifted.
    Read-only: returns the drift list, fixes nothing.
    """
    # import models lazily to avoid circular imports at module import time
    from .models import Expense, OutflowTransaction

    paid = dict(
        OutflowTransaction.objects.exclude(expense_number="")
        .values_list("expense_number").annotate(total=Sum("amount")).order_by()
    )

    drift = []
    for expense in Expense.objects.all():
        actual = paid.get(expense.expense_number, 0)
        expected_status = Expense.derive_status(actual, expense.price)
        if actual != expense.paid_amount or expected_status != expense.status:
            drift.append({
                "expense_number": expense.expense_number,
                "stored_paid_amount": expense.paid_amount,
                "linked_payments": actual,
                "stored_status": expense.status,
                "expected_status": expected_status,
            })

    # Payments pointing at expense numbers that no longer exist
    known = set(Expense.objects.values_list("expense_number", flat=True))
    orphans = sorted(number for number in paid if number not in known)

    if drift or orphans:
        logger.warning("expense audit: %d drifted, %d orphan links",
                       len(drift), len(orphans))
    else:
        logger.info("expense audit: all balances match")
    return {"drift": drift, "orphan_expense_numbers": orphans}


@shared_task
def audit_flat_statuses():
    """
    Report Sold flats without a sale, sales whose flat is not Sold,
    and flats carrying more than one sale.
    """
    from .models import Flat, Sale

    sold_without_sale = list(
        Flat.objects.sold().filter(sales__isnull=True)
        .values_list("pk", flat=True)
    )
    sales_on_unsold_flat = list(
        Sale.objects.exclude(flat__status="Sold").values_list("pk", flat=True)
    )
    multiple_sales = list(
        Flat.objects.annotate(n=Count("sales")).filter(n__gt=1)
        .values_list("pk", flat=True)
    )

    if sold_without_sale or sales_on_unsold_flat or multiple_sales:
        logger.warning(
            "flat audit: %d sold without sale, %d sales on unsold flats, "
            "%d flats with several sales", len(sold_without_sale),
            len(sales_on_unsold_flat), len(multiple_sales))
    else:
        logger.info("flat audit: flats and sales agree")
    return {
        "sold_without_sale": sold_without_sale,
        "sales_on_unsold_flat": sales_on_unsold_flat,
        "flats_with_multiple_sales": multiple_sales,
    }
