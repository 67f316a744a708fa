from django.core.exceptions import ValidationError
from django.test import TestCase

from ..exceptions import InvalidAmount, NotFound
from ..models import InflowTransaction
from ..services import (create_sale, delete_inflow_payment, edit_inflow_payment,
                        record_inflow_payment)
from .helpers import LedgerFixtureMixin


class InflowPaymentTests(LedgerFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.sale = create_sale(
            project_id=self.project.pk, flat_id=self.flat_a.pk,
            customer_id=self.customer.pk, base_price=4_000_000,
            sale_date=self.sale_date,
        )

    def pay(self, **overrides):
        data = dict(project_id=self.project.pk, flat_id=self.flat_a.pk,
                    customer_id=self.customer.pk, amount=100_000,
                    date=self.sale_date)
        data.update(overrides)
        return record_inflow_payment(**data)

    def test_installment_gets_generated_receipt(self):
        inflow = self.pay()
        self.assertEqual(inflow.payment_type, "Installment")
        self.assertEqual(inflow.receipt_number, "RCPT-000001")
        self.assertEqual(self.pay().receipt_number, "RCPT-000002")

    def test_given_receipt_number_is_kept(self):
        inflow = self.pay(receipt_number="MR-5521")
        self.assertEqual(inflow.receipt_number, "MR-5521")

    def test_only_the_buyer_pays_for_a_flat(self):
        with self.assertRaises(ValidationError):
            self.pay(flat_id=self.flat_b.pk)
        self.assertFalse(InflowTransaction.objects.exists())

    def test_other_purpose_needs_description(self):
        with self.assertRaises(ValidationError):
            self.pay(payment_purpose="Other")
        inflow = self.pay(payment_purpose="Other", other_purpose="Car parking")
        self.assertEqual(inflow.purpose_display, "Car parking")

    def test_amount_must_be_positive(self):
        with self.assertRaises(InvalidAmount):
            self.pay(amount=0)

    def test_edit_and_delete(self):
        inflow = self.pay()
        inflow = edit_inflow_payment(inflow.pk, amount=150_000, reference="BT-1")
        inflow.refresh_from_db()
        self.assertEqual((inflow.amount, inflow.reference), (150_000, "BT-1"))

        delete_inflow_payment(inflow.pk)
        self.assertFalse(InflowTransaction.objects.exists())
        with self.assertRaises(NotFound):
            delete_inflow_payment(inflow.pk)

    def test_edit_rejects_unknown_fields(self):
        inflow = self.pay()
        with self.assertRaises(ValidationError):
            edit_inflow_payment(inflow.pk, flat_id=self.flat_b.pk)
