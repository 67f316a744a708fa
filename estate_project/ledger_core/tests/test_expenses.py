from django.core.exceptions import ValidationError
from django.test import TestCase

from ..exceptions import InvalidAmount, NotFound
from ..models import Expense, Project
from ..services import (create_expense, delete_expense, make_payment,
                        update_expense)
from ..services.counters import next_receipt_number
from .helpers import LedgerFixtureMixin


class ExpenseRecordTests(LedgerFixtureMixin, TestCase):

    def create(self, price=100_000):
        return create_expense(vendor_id=self.vendor.pk, project_id=self.project.pk,
                              item_id=self.item.pk, price=price,
                              date=self.sale_date, quantity=20)

    def test_expense_numbers_are_sequential(self):
        first = self.create()
        second = self.create()
        self.assertEqual(first.expense_number, "EXID-0100")
        self.assertEqual(second.expense_number, "EXID-0101")
        self.assertEqual((first.paid_amount, first.status), (0, "Unpaid"))

    def test_receipt_numbers_use_their_own_sequence(self):
        self.create()
        self.assertEqual(next_receipt_number(), "RCPT-000001")
        self.assertEqual(next_receipt_number(), "RCPT-000002")

    def test_price_must_be_positive(self):
        with self.assertRaises(ValidationError):
            self.create(price=0)
        self.assertFalse(Expense.objects.exists())

    def test_unknown_vendor_is_not_found(self):
        with self.assertRaises(NotFound):
            create_expense(vendor_id=999_999, project_id=self.project.pk,
                           item_id=self.item.pk, price=10, date=self.sale_date)

    def test_price_cannot_drop_below_paid_amount(self):
        expense = self.create()
        make_payment(expense.pk, amount_to_pay=40_000, payment_date=self.sale_date)

        with self.assertRaises(InvalidAmount):
            update_expense(expense.pk, price=30_000)

        expense.refresh_from_db()
        self.assertEqual(expense.price, 100_000)

    def test_price_change_rederives_status(self):
        expense = self.create()
        make_payment(expense.pk, amount_to_pay=40_000, payment_date=self.sale_date)

        expense = update_expense(expense.pk, price=40_000, description="revised")
        self.assertEqual(expense.status, "Paid")

        expense = update_expense(expense.pk, price=80_000)
        self.assertEqual(expense.status, "Partially Paid")

    def test_project_is_fixed_once_payments_exist(self):
        expense = self.create()
        make_payment(expense.pk, amount_to_pay=1_000, payment_date=self.sale_date)
        other = Project.objects.create(
            project_name="Hill Side", location="Sylhet", start_date=self.sale_date)
        with self.assertRaises(ValidationError):
            update_expense(expense.pk, project_id=other.pk)

    def test_delete_blocked_while_payments_are_linked(self):
        expense = self.create()
        make_payment(expense.pk, amount_to_pay=1_000, payment_date=self.sale_date)
        with self.assertRaises(ValidationError):
            delete_expense(expense.pk)
        self.assertTrue(Expense.objects.filter(pk=expense.pk).exists())

    def test_delete_unpaid_expense(self):
        expense = self.create()
        delete_expense(expense.pk)
        self.assertFalse(Expense.objects.exists())


class ExpenseModelTests(LedgerFixtureMixin, TestCase):

    def test_derive_status_thresholds(self):
        self.assertEqual(Expense.derive_status(0, 100), "Unpaid")
        self.assertEqual(Expense.derive_status(1, 100), "Partially Paid")
        self.assertEqual(Expense.derive_status(99, 100), "Partially Paid")
        self.assertEqual(Expense.derive_status(100, 100), "Paid")

    def test_status_must_follow_paid_amount(self):
        expense = self.make_expense(price=100_000, paid_amount=40_000)
        expense.status = "Paid"
        with self.assertRaises(ValidationError):
            expense.save()

    def test_paid_amount_cannot_exceed_price(self):
        expense = self.make_expense(price=100_000)
        expense.paid_amount = 100_001
        expense.status = "Paid"
        with self.assertRaises(ValidationError):
            expense.save()

    def test_due_amount(self):
        expense = self.make_expense(price=100_000, paid_amount=40_000)
        self.assertEqual(expense.due_amount, 60_000)
