from django.core.exceptions import ValidationError
from django.test import TestCase

from ..exceptions import FlatNotAvailable
from ..services import create_sale, delete_payment, make_payment
from ..signals import ledger_changed
from .helpers import LedgerFixtureMixin


class LedgerChangedSignalTests(LedgerFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.received = []
        ledger_changed.connect(self.record)
        self.addCleanup(ledger_changed.disconnect, self.record)

    def record(self, sender, collection, action, instance, **kwargs):
        self.received.append((collection, action))

    def test_sale_announces_each_collection_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            create_sale(project_id=self.project.pk, flat_id=self.flat_a.pk,
                        customer_id=self.customer.pk, base_price=1_000_000,
                        downpayment=100_000, sale_date=self.sale_date)
            # nothing is sent before the commit
            self.assertEqual(self.received, [])

        self.assertEqual(self.received, [
            ("sales", "create"),
            ("flats", "update"),
            ("inflowTransactions", "create"),
        ])

    def test_rejected_write_sends_nothing(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(FlatNotAvailable):
                create_sale(project_id=self.project.pk, flat_id=self.flat_c.pk,
                            customer_id=self.customer.pk, base_price=1_000_000,
                            sale_date=self.sale_date)
        self.assertEqual(callbacks, [])
        self.assertEqual(self.received, [])

    def test_payment_changes_are_announced(self):
        expense = self.make_expense()
        with self.captureOnCommitCallbacks(execute=True):
            _, outflow = make_payment(expense.pk, amount_to_pay=10_000,
                                      payment_date=self.sale_date)
            delete_payment(outflow.pk)

        self.assertIn(("expenses", "update"), self.received)
        self.assertIn(("outflowTransactions", "create"), self.received)
        self.assertIn(("outflowTransactions", "delete"), self.received)


class DeleteGuardTests(LedgerFixtureMixin, TestCase):

    def test_sold_flat_cannot_be_deleted(self):
        self.flat_a.status = "Sold"
        self.flat_a.save()
        with self.assertRaises(ValidationError):
            self.flat_a.delete()

    def test_expense_with_payments_cannot_be_deleted(self):
        expense = self.make_expense()
        self.make_outflow(expense)
        with self.assertRaises(ValidationError):
            expense.delete()
