import csv
import io

from django.test import TestCase

from ..models import Customer, Vendor
from ..services import create_sale, make_payment, record_outflow, rows_to_csv
from ..services.exports import (CUSTOMER_COLUMNS, EXPENSE_COLUMNS, REPORTS,
                                SALES_COLUMNS, VENDOR_PAYMENT_COLUMNS,
                                customer_rows, expense_rows, payment_log_rows,
                                sales_rows, vendor_payment_rows, vendor_rows)
from .helpers import LedgerFixtureMixin


def parse(text):
    return list(csv.reader(io.StringIO(text)))


class ExportTests(LedgerFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        create_sale(
            project_id=self.project.pk, flat_id=self.flat_a.pk,
            customer_id=self.customer.pk, base_price=4_000_000,
            parking_charge=200_000, utility_charge=100_000,
            extra_costs=[{"purpose": "Generator", "amount": 50_000}],
            downpayment=500_000, monthly_installment=50_000,
            sale_date=self.sale_date, note="Corner unit",
        )

    def test_sales_rows(self):
        [row] = sales_rows()
        self.assertEqual(row["Customer Name"], "Rahim Uddin")
        self.assertEqual(row["Flat Number"], "1A")
        self.assertEqual(row["Flat Size (SFT)"], 1250)
        self.assertEqual(row["Extra Costs"], 50_000)
        self.assertEqual(row["Total Price"], 4_350_000)

    def test_csv_has_header_then_rows(self):
        lines = parse(rows_to_csv(sales_rows(), SALES_COLUMNS))
        self.assertEqual(lines[0], SALES_COLUMNS)
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[1][1], "2025-09-18")
        self.assertEqual(lines[1][-1], "Corner unit")

    def test_customer_without_sale_gets_placeholders(self):
        Customer.objects.create(full_name="Walk In", mobile="01900000000")
        rows = {row["Customer Name"]: row for row in customer_rows()}

        self.assertEqual(rows["Rahim Uddin"]["Paid Amount"], 500_000)
        self.assertEqual(rows["Rahim Uddin"]["Due Amount"], 3_850_000)
        self.assertEqual(rows["Walk In"]["Project"], "N/A")
        self.assertEqual(rows["Walk In"]["Flat"], "N/A")
        self.assertEqual(rows["Walk In"]["Due Amount"], 0)

        lines = parse(rows_to_csv(customer_rows(), CUSTOMER_COLUMNS))
        self.assertEqual(lines[0], CUSTOMER_COLUMNS)
        self.assertEqual(len(lines), 3)

    def test_payment_log_lists_booking_receipt(self):
        [row] = payment_log_rows()
        self.assertEqual(row["Receipt ID"], "RCPT-000001")
        self.assertEqual(row["Purpose"], "Booking Money")
        self.assertEqual(row["Amount"], 500_000)

    def test_expense_and_vendor_payment_rows(self):
        expense = self.make_expense(price=100_000)
        make_payment(expense.pk, amount_to_pay=30_000, payment_date=self.sale_date)
        record_outflow(amount=1_500, date=self.sale_date,
                       description="Stationery")

        [expense_row] = expense_rows()
        self.assertEqual(expense_row["Expense ID"], "EXID-0100")
        self.assertEqual(expense_row["Status"], "Partially Paid")

        rows = {row["Description"]: row for row in vendor_payment_rows()}
        linked = rows["Payment for EXID-0100"]
        self.assertEqual(linked["Project"], "Lake View")
        self.assertEqual(linked["Vendor"], "Shah Cement")
        self.assertEqual(linked["Expense ID"], "EXID-0100")
        general = rows["Stationery"]
        self.assertEqual(general["Project"], "Office/General")
        self.assertEqual(general["Expense ID"], "N/A")
        self.assertEqual(general["Vendor"], "N/A")

        header = parse(rows_to_csv([], VENDOR_PAYMENT_COLUMNS))
        self.assertEqual(header, [VENDOR_PAYMENT_COLUMNS])
        self.assertEqual(parse(rows_to_csv([], EXPENSE_COLUMNS))[0][0],
                         "Expense ID")

    def test_vendor_rows(self):
        self.make_expense(price=100_000, paid_amount=25_000)
        Vendor.objects.create(vendor_name="Idle Supplier")
        rows = {row["Vendor Name"]: row for row in vendor_rows()}

        self.assertEqual(rows["Shah Cement"]["Total Billed Amount"], 100_000)
        self.assertEqual(rows["Shah Cement"]["Due Amount"], 75_000)
        self.assertEqual(rows["Idle Supplier"]["Total Billed Amount"], 0)

    def test_every_report_builds(self):
        for name, (build_rows, columns) in REPORTS.items():
            with self.subTest(report=name):
                lines = parse(rows_to_csv(build_rows(), columns))
                self.assertEqual(lines[0], columns)
