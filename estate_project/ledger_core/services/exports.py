"""
CSV export rows for the report screens.
Each *_rows() function returns a list of dicts keyed by the report's
column headers; rows_to_csv() turns them into CSV text.
"""
import csv
import io

from ..models import (Customer, Expense, InflowTransaction, OutflowTransaction,
                      Sale, Vendor)
from .reporting import _in_range, _paid_by_flat, label, placeholder, vendor_totals

SALES_COLUMNS = [
    "Sale ID", "Sale Date", "Customer Name", "Project Name", "Flat Number",
    "Flat Size (SFT)", "Price per SFT", "Parking Charge", "Utility Charge",
    "Extra Costs", "Total Price", "Downpayment", "Monthly Installment", "Note",
]
CUSTOMER_COLUMNS = [
    "Customer Name", "Mobile", "Address", "NID Number", "Project", "Flat",
    "Total Amount", "Paid Amount", "Due Amount",
]
EXPENSE_COLUMNS = [
    "Expense ID", "Date", "Vendor", "Project", "Item", "Quantity", "Price",
    "Paid Amount", "Status", "Description",
]
PAYMENT_LOG_COLUMNS = [
    "Receipt ID", "Date", "Customer", "Project", "Flat", "Amount", "Method",
    "Purpose", "Reference",
]
VENDOR_PAYMENT_COLUMNS = [
    "Date", "Vendor", "Project", "Expense ID", "Amount", "Method",
    "Reference", "Description",
]
VENDOR_COLUMNS = [
    "Vendor Name", "Phone Number", "Enterprise", "Total Billed Amount",
    "Paid Amount", "Due Amount",
]

GENERAL_PROJECT_LABEL = "Office/General"


def format_value(value):
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows, columns) -> str:
    """CSV text with a header row; missing keys become empty cells."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: format_value(row.get(key)) for key in columns})
    return buffer.getvalue()


def sales_rows(start=None, end=None):
    sales = (_in_range(Sale.objects, "sale_date", start, end)
             .select_related("customer", "project", "flat")
             .prefetch_related("extra_costs"))
    return [
        {
            "Sale ID": sale.pk,
            "Sale Date": sale.sale_date,
            "Customer Name": label(sale.customer, "full_name"),
            "Project Name": label(sale.project, "project_name"),
            "Flat Number": label(sale.flat, "flat_number"),
            "Flat Size (SFT)": label(sale.flat, "flat_size"),
            "Price per SFT": sale.per_sft_price or 0,
            "Parking Charge": sale.parking_charge or 0,
            "Utility Charge": sale.utility_charge or 0,
            "Extra Costs": sale.extra_costs_total(),
            "Total Price": sale.total_price,
            "Downpayment": sale.downpayment or 0,
            "Monthly Installment": sale.monthly_installment or 0,
            "Note": sale.note,
        }
        for sale in sales
    ]


def customer_rows():
    """One row per customer and flat bought; customers without a sale
    get a single row with placeholders."""
    paid = _paid_by_flat()
    sales_by_customer = {}
    for sale in Sale.objects.select_related("project", "flat"):
        sales_by_customer.setdefault(sale.customer_id, []).append(sale)

    rows = []
    for customer in Customer.objects.all():
        base = {
            "Customer Name": customer.full_name,
            "Mobile": customer.mobile,
            "Address": customer.address,
            "NID Number": customer.nid_number,
        }
        sales = sales_by_customer.get(customer.pk)
        if not sales:
            rows.append({**base, "Project": placeholder(),
                         "Flat": placeholder(), "Total Amount": 0,
                         "Paid Amount": 0, "Due Amount": 0})
            continue
        for sale in sales:
            total_paid = paid.get((customer.pk, sale.flat_id), (0, None))[0]
            rows.append({
                **base,
                "Project": label(sale.project, "project_name"),
                "Flat": label(sale.flat, "flat_number"),
                "Total Amount": sale.total_price,
                "Paid Amount": total_paid,
                "Due Amount": sale.total_price - total_paid,
            })
    return rows


def expense_rows(start=None, end=None):
    expenses = (_in_range(Expense.objects, "date", start, end)
                .select_related("vendor", "project", "item"))
    return [
        {
            "Expense ID": expense.expense_number,
            "Date": expense.date,
            "Vendor": label(expense.vendor, "vendor_name"),
            "Project": label(expense.project, "project_name"),
            "Item": label(expense.item, "name"),
            "Quantity": expense.quantity,
            "Price": expense.price,
            "Paid Amount": expense.paid_amount,
            "Status": expense.status,
            "Description": expense.description,
        }
        for expense in expenses
    ]


def payment_log_rows(start=None, end=None):
    inflows = (_in_range(InflowTransaction.objects, "date", start, end)
               .select_related("customer", "project", "flat"))
    return [
        {
            "Receipt ID": inflow.receipt_number,
            "Date": inflow.date,
            "Customer": label(inflow.customer, "full_name"),
            "Project": label(inflow.project, "project_name"),
            "Flat": label(inflow.flat, "flat_number"),
            "Amount": inflow.amount,
            "Method": inflow.payment_method,
            "Purpose": inflow.purpose_display,
            "Reference": inflow.reference,
        }
        for inflow in inflows
    ]


def vendor_payment_rows(start=None, end=None):
    outflows = (_in_range(OutflowTransaction.objects, "date", start, end)
                .select_related("project"))
    return [
        {
            "Date": outflow.date,
            "Vendor": outflow.supplier_vendor or placeholder(),
            "Project": (outflow.project.project_name if outflow.project
                        else GENERAL_PROJECT_LABEL),
            "Expense ID": outflow.expense_number or placeholder(),
            "Amount": outflow.amount,
            "Method": outflow.payment_method,
            "Reference": outflow.reference,
            "Description": outflow.description,
        }
        for outflow in outflows
    ]


def vendor_rows():
    totals = vendor_totals()
    rows = []
    for vendor in Vendor.objects.all():
        billed, paid = totals.get(vendor.pk, (0, 0))
        rows.append({
            "Vendor Name": vendor.vendor_name,
            "Phone Number": vendor.phone_number,
            "Enterprise": vendor.enterprise_name,
            "Total Billed Amount": billed,
            "Paid Amount": paid,
            "Due Amount": billed - paid,
        })
    return rows


# report name -> (row builder, columns)
REPORTS = {
    "sales": (sales_rows, SALES_COLUMNS),
    "customers": (customer_rows, CUSTOMER_COLUMNS),
    "expenses": (expense_rows, EXPENSE_COLUMNS),
    "payment-log": (payment_log_rows, PAYMENT_LOG_COLUMNS),
    "vendor-payments": (vendor_payment_rows, VENDOR_PAYMENT_COLUMNS),
    "vendors": (vendor_rows, VENDOR_COLUMNS),
}
