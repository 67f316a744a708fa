import threading
import unittest
from unittest import mock

from django.core.exceptions import ValidationError
from django.db import connection
from django.db.models.query import QuerySet
from django.test import TestCase, TransactionTestCase

from ..models import Expense, Flat, OutflowTransaction, Sale
from ..services import (create_sale, delete_payment, edit_payment,
                        make_payment)
from .helpers import LedgerFixtureMixin


class RowLockTests(LedgerFixtureMixin, TestCase):
    """Every read-modify-write locks the rows it reads first."""

    def locked_models(self, func, *args, **kwargs):
        locked = []
        original = QuerySet.select_for_update

        def spy(qs, *a, **kw):
            locked.append(qs.model)
            return original(qs, *a, **kw)

        with mock.patch.object(QuerySet, "select_for_update", spy):
            func(*args, **kwargs)
        return locked

    def test_make_payment_locks_expense(self):
        expense = self.make_expense()
        locked = self.locked_models(make_payment, expense.pk,
                                    amount_to_pay=10_000,
                                    payment_date=self.sale_date)
        self.assertIn(Expense, locked)

    def test_edit_and_delete_payment_lock_outflow_and_expense(self):
        expense = self.make_expense(paid_amount=30_000)
        outflow = self.make_outflow(expense, amount=30_000)

        locked = self.locked_models(edit_payment, outflow.pk, amount=20_000,
                                    date=self.sale_date)
        self.assertEqual(locked[:2], [OutflowTransaction, Expense])

        locked = self.locked_models(delete_payment, outflow.pk)
        self.assertEqual(locked[:2], [OutflowTransaction, Expense])

    def test_create_sale_locks_flat(self):
        locked = self.locked_models(
            create_sale, project_id=self.project.pk, flat_id=self.flat_a.pk,
            customer_id=self.customer.pk, base_price=1_000_000,
            sale_date=self.sale_date)
        self.assertIn(Flat, locked)


@unittest.skipUnless(connection.vendor == "postgresql",
                     "row locks need PostgreSQL")
class ConcurrentWriteTests(LedgerFixtureMixin, TransactionTestCase):
    """Two writers racing on one row: the lock makes the second one see
    the first one's result."""

    def race(self, *calls):
        barrier = threading.Barrier(len(calls))
        results = []

        def run(func, kwargs):
            try:
                barrier.wait()
                func(**kwargs)
                results.append("ok")
            except ValidationError:
                results.append("rejected")
            except Exception as exc:
                results.append(exc)
            finally:
                connection.close()

        threads = [threading.Thread(target=run, args=call) for call in calls]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return sorted(results, key=str)

    def test_two_payments_cannot_overpay(self):
        expense = self.make_expense(price=100_000)
        pay = dict(expense_id=expense.pk, amount_to_pay=60_000,
                   payment_date=self.sale_date)

        results = self.race((make_payment, pay), (make_payment, pay))

        self.assertEqual(results, ["ok", "rejected"])
        expense.refresh_from_db()
        self.assertEqual(expense.paid_amount, 60_000)
        self.assertEqual(OutflowTransaction.objects.count(), 1)

    def test_payment_and_edit_keep_paid_amount_in_sync(self):
        expense = self.make_expense(price=100_000, paid_amount=30_000)
        outflow = self.make_outflow(expense, amount=30_000)

        results = self.race(
            (make_payment, dict(expense_id=expense.pk, amount_to_pay=20_000,
                                payment_date=self.sale_date)),
            (edit_payment, dict(outflow_id=outflow.pk, amount=50_000,
                                date=self.sale_date)),
        )

        self.assertEqual(results, ["ok", "ok"])
        expense.refresh_from_db()
        linked = sum(OutflowTransaction.objects.filter(
            expense_number=expense.expense_number).values_list("amount", flat=True))
        self.assertEqual(expense.paid_amount, linked)
        self.assertEqual(expense.paid_amount, 70_000)

    def test_one_flat_sells_once(self):
        sell = dict(project_id=self.project.pk, flat_id=self.flat_a.pk,
                    customer_id=self.customer.pk, base_price=1_000_000,
                    sale_date=self.sale_date)

        results = self.race((create_sale, sell), (create_sale, sell))

        self.assertEqual(results, ["ok", "rejected"])
        self.assertEqual(Sale.objects.filter(flat=self.flat_a).count(), 1)
