import datetime

from django.core.exceptions import ValidationError
from django.test import TestCase

from ..models import (Customer, Flat, InflowTransaction, OutflowTransaction,
                      Project)
from ..services import (create_project, create_sale, delete_project,
                        delete_sale, record_outflow, update_project)


class ProjectTests(TestCase):

    def setUp(self):
        self.project = create_project(
            project_name="River Bank",
            location="Narayanganj",
            developer_share=55,
            landowner_share=45,
            start_date=datetime.date(2025, 3, 1),
            flats=[
                {"flat_number": "1A", "flat_size": 1200, "ownership": "Developer"},
                {"flat_number": "1B", "flat_size": 1200, "ownership": "Landowner"},
            ],
        )
        self.customer = Customer.objects.create(full_name="Karim", mobile="0170")

    def test_create_project_with_available_flats(self):
        self.assertEqual(self.project.total_flats, 2)
        self.assertEqual(self.project.flats.available().count(), 2)

    def test_shares_must_sum_to_hundred(self):
        with self.assertRaises(ValidationError):
            create_project(project_name="Bad", location="X",
                           developer_share=50, landowner_share=40,
                           start_date=datetime.date(2025, 1, 1))
        self.assertEqual(Project.objects.count(), 1)

    def test_update_syncs_flats(self):
        flat_1a = self.project.flats.get(flat_number="1A")
        update_project(self.project.pk, status="Ongoing", flats=[
            {"id": flat_1a.pk, "flat_number": "1A", "flat_size": 1300},
            {"flat_number": "2A", "flat_size": 1250},
        ])

        self.project.refresh_from_db()
        self.assertEqual(self.project.status, "Ongoing")
        numbers = sorted(self.project.flats.values_list("flat_number", flat=True))
        self.assertEqual(numbers, ["1A", "2A"])
        flat_1a.refresh_from_db()
        self.assertEqual(flat_1a.flat_size, 1300)

    def test_sold_flat_cannot_be_removed(self):
        flat = self.project.flats.get(flat_number="1B")
        create_sale(project_id=self.project.pk, flat_id=flat.pk,
                    customer_id=self.customer.pk, base_price=1_000_000,
                    sale_date=datetime.date(2025, 4, 1))

        with self.assertRaises(ValidationError):
            update_project(self.project.pk, flats=[])
        self.assertEqual(self.project.flats.count(), 2)

    def test_delete_blocked_while_sales_exist(self):
        flat = self.project.flats.first()
        sale = create_sale(project_id=self.project.pk, flat_id=flat.pk,
                           customer_id=self.customer.pk, base_price=1_000_000,
                           downpayment=100_000,
                           sale_date=datetime.date(2025, 4, 1))
        with self.assertRaises(ValidationError):
            delete_project(self.project.pk)

        # without the sale the project goes, with its flats and cash logs
        delete_sale(sale.pk)
        record_outflow(amount=500, date=datetime.date(2025, 4, 2),
                       project_id=self.project.pk)
        delete_project(self.project.pk)

        self.assertFalse(Project.objects.exists())
        self.assertFalse(Flat.objects.exists())
        self.assertFalse(InflowTransaction.objects.exists())
        self.assertFalse(OutflowTransaction.objects.exists())
