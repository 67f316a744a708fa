import datetime

from ..models import (Customer, Expense, ExpenseItem, Flat,
                      OutflowTransaction, Project, Vendor)


class LedgerFixtureMixin:
    """Shared rows for ledger tests: one project with three flats,
    a customer, a vendor and an expense item."""

    sale_date = datetime.date(2025, 9, 18)

    def setUp(self):
        self.project = Project.objects.create(
            project_name="Lake View",
            location="Dhaka",
            total_flats=3,
            developer_share=60,
            landowner_share=40,
            start_date=datetime.date(2025, 1, 1),
            status="Ongoing",
        )
        self.flat_a = Flat.objects.create(project=self.project, flat_number="1A", flat_size=1250)
        self.flat_b = Flat.objects.create(project=self.project, flat_number="1B", flat_size=1100)
        self.flat_c = Flat.objects.create(project=self.project, flat_number="2A", flat_size=1250,
                                          status="Reserved")
        self.customer = Customer.objects.create(full_name="Rahim Uddin", mobile="01711111111",
                                                address="Mirpur", nid_number="1234567890")
        self.vendor = Vendor.objects.create(vendor_name="Shah Cement", phone_number="01811111111",
                                            enterprise_name="Shah Cement Ltd")
        self.item = ExpenseItem.objects.create(name="Cement")

    def make_expense(self, price=100_000, paid_amount=0, number="EXID-0100"):
        """Expense with status derived from paid_amount."""
        return Expense.objects.create(
            expense_number=number,
            vendor=self.vendor,
            project=self.project,
            item=self.item,
            quantity=10,
            price=price,
            paid_amount=paid_amount,
            status=Expense.derive_status(paid_amount, price),
            date=self.sale_date,
        )

    def make_outflow(self, expense=None, amount=30_000, project=None):
        return OutflowTransaction.objects.create(
            project=project if project is not None else (expense.project if expense else None),
            amount=amount,
            date=self.sale_date,
            supplier_vendor=self.vendor.vendor_name,
            expense_number=expense.expense_number if expense else "",
        )
