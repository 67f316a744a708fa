"""
Read-only summaries joined across sales, flats, projects, customers,
expenses and the cash logs. Nothing here is authoritative; totals are
recomputed from the stored records on every call.
"""
from django.conf import settings
from django.db.models import BigIntegerField, Count, Max, Q, Sum
from django.db.models.functions import Coalesce

from ..models import (Customer, Expense, InflowTransaction, OperatingCost,
                      OutflowTransaction, Project, Sale, Vendor)
from .store import fetch


def placeholder():
    return getattr(settings, "LEDGER_MISSING_PLACEHOLDER", "N/A")


def label(obj, attr):
    """attr of a joined row, or the placeholder when the row is missing."""
    if obj is None:
        return placeholder()
    value = getattr(obj, attr, None)
    return placeholder() if value in (None, "") else value


def _total(qs, field):
    return qs.aggregate(
        total=Coalesce(Sum(field), 0, output_field=BigIntegerField())
    )["total"]


def _in_range(qs, field, start=None, end=None):
    if start:
        qs = qs.filter(**{f"{field}__gte": start})
    if end:
        qs = qs.filter(**{f"{field}__lte": end})
    return qs


# ---------- Dashboard ----------
def dashboard_stats(start=None, end=None) -> dict:
    """Company-wide totals, optionally limited to a date range."""
    total_revenue = _total(_in_range(Sale.objects, "sale_date", start, end),
                           "total_price")
    total_inflow = _total(
        _in_range(InflowTransaction.objects, "date", start, end), "amount")
    total_outflow = _total(
        _in_range(OutflowTransaction.objects, "date", start, end), "amount")
    total_expenses = _total(_in_range(Expense.objects, "date", start, end),
                            "price")
    total_operating_cost = _total(
        _in_range(OperatingCost.objects, "date", start, end), "amount")

    return {
        "total_revenue": total_revenue,
        "total_inflow": total_inflow,
        "total_outflow": total_outflow,
        "net_cash_flow": total_inflow - total_outflow,
        "total_expenses": total_expenses,
        "total_operating_cost": total_operating_cost,
        "gross_profit": total_revenue - total_expenses,
        "actual_profit": total_revenue - (total_expenses + total_operating_cost),
    }


# ---------- Project ----------
def project_summary(project_id) -> dict:
    project = fetch(Project, project_id)
    sold_flats = project.flats.filter(status="Sold").count()
    return {
        "project_id": project.pk,
        "project_name": project.project_name,
        "status": project.status,
        "total_flats": project.total_flats,
        "sold_flats": sold_flats,
        "unsold_flats": project.total_flats - sold_flats,
        "total_revenue": _total(project.sales, "total_price"),
        "total_inflow": _total(project.inflow_transactions, "amount"),
        "total_outflow": _total(project.outflow_transactions, "amount"),
        "total_expense": _total(project.expenses, "price"),
    }


def project_summaries() -> list[dict]:
    """Every project's figures in one query."""
    projects = Project.objects.annotate(
        sold_flats=Count("flats", filter=Q(flats__status="Sold"), distinct=True),
    )
    revenue = dict(Sale.objects.values_list("project")
                   .annotate(total=Sum("total_price")).order_by())
    inflow = dict(InflowTransaction.objects.values_list("project")
                  .annotate(total=Sum("amount")).order_by())
    outflow = dict(OutflowTransaction.objects.exclude(project=None)
                   .values_list("project").annotate(total=Sum("amount"))
                   .order_by())
    return [
        {
            "project_id": project.pk,
            "project_name": project.project_name,
            "status": project.status,
            "total_flats": project.total_flats,
            "sold_flats": project.sold_flats,
            "unsold_flats": project.total_flats - project.sold_flats,
            "total_revenue": revenue.get(project.pk, 0),
            "total_inflow": inflow.get(project.pk, 0),
            "total_outflow": outflow.get(project.pk, 0),
        }
        for project in projects
    ]


# ---------- Customer ----------
def _paid_by_flat(customer=None):
    """{(customer_id, flat_id): (total paid, last payment date)}"""
    qs = InflowTransaction.objects.all()
    if customer is not None:
        qs = qs.filter(customer=customer)
    rows = (qs.values("customer", "flat")
            .annotate(total=Sum("amount"), last=Max("date")).order_by())
    return {(row["customer"], row["flat"]): (row["total"], row["last"])
            for row in rows}


def customer_summaries(customer_id) -> list[dict]:
    """One entry per sale made to the customer, with paid and due amounts."""
    customer = fetch(Customer, customer_id)
    paid = _paid_by_flat(customer)
    summaries = []
    for sale in (Sale.objects.filter(customer=customer)
                 .select_related("project", "flat")):
        total_paid, last_payment = paid.get((customer.pk, sale.flat_id), (0, None))
        summaries.append({
            "sale_id": sale.pk,
            "customer_name": label(customer, "full_name"),
            "customer_mobile": label(customer, "mobile"),
            "project_name": label(sale.project, "project_name"),
            "flat_number": label(sale.flat, "flat_number"),
            "total_price": sale.total_price,
            "total_paid": total_paid,
            "total_due": sale.total_price - total_paid,
            "last_payment_date": last_payment or placeholder(),
        })
    return summaries


# ---------- Vendor ----------
def vendor_totals() -> dict:
    """{vendor_id: (total billed, paid)}"""
    rows = (Expense.objects.values("vendor")
            .annotate(billed=Sum("price"), paid=Sum("paid_amount")).order_by())
    return {row["vendor"]: (row["billed"], row["paid"]) for row in rows}


def vendor_summary(vendor_id) -> dict:
    vendor = fetch(Vendor, vendor_id)
    billed, paid = vendor_totals().get(vendor.pk, (0, 0))
    return {
        "vendor_id": vendor.pk,
        "vendor_name": vendor.vendor_name,
        "total_billed": billed,
        "total_paid": paid,
        "total_due": billed - paid,
        "open_expenses": Expense.objects.for_vendor(vendor).payable().count(),
    }
