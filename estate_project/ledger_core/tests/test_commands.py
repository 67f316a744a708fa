from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from ..models import Expense, Flat, OperatingCost, Project, Sale


class SeedDemoCommandTests(TestCase):

    def test_seeds_a_consistent_ledger(self):
        out = StringIO()
        call_command("seed_demo", "--project", "Test Tower", "--flats", "4",
                     stdout=out)

        project = Project.objects.get(project_name="Test Tower")
        self.assertEqual(Flat.objects.filter(project=project).count(), 4)
        sale = Sale.objects.get(project=project)
        self.assertEqual(sale.flat.status, "Sold")
        expense = Expense.objects.get(project=project)
        self.assertEqual(expense.status,
                         Expense.derive_status(expense.paid_amount, expense.price))
        self.assertTrue(OperatingCost.objects.exists())
