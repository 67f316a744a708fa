import datetime

from django.core.management.base import BaseCommand
from django.db import transaction

from ledger_core.models import Customer, Vendor
from ledger_core.services import (add_expense_item, add_operating_cost_item,
                                  create_expense, create_project, create_sale,
                                  make_payment, record_operating_cost)


class Command(BaseCommand):
    help = "Seeds the database with a demo project, sale and expense."

    # Define command-line argument
    def add_arguments(self, parser):
        parser.add_argument(
            "--project",
            type=str,
            default="Demo Heights",
            help="Name of the demo project (default: Demo Heights)",
        )
        parser.add_argument(
            "--flats",
            type=int,
            default=6,
            help="Number of flats to create (default: 6)",
        )

    def handle(self, *args, **options):
        name = options["project"]
        today = datetime.date.today()

        self.stdout.write(self.style.NOTICE(f"Seeding demo data for {name}..."))

        with transaction.atomic():
            project = create_project(
                project_name=name,
                location="Dhaka",
                developer_share=60,
                landowner_share=40,
                start_date=today,
                status="Ongoing",
                estimated_budget=50_000_000,
                target_sell=80_000_000,
                flats=[
                    {"flat_number": f"{floor}{unit}", "flat_size": 1250,
                     "ownership": "Developer" if unit == "A" else "Landowner"}
                    for floor in range(1, options["flats"] // 2 + 1)
                    for unit in ("A", "B")
                ],
            )
            customer = Customer.objects.create(
                full_name="Demo Customer", mobile="01700000000",
                address="Gulshan, Dhaka", nid_number="1990000000000",
            )
            vendor = Vendor.objects.create(
                vendor_name="Demo Cement", phone_number="01800000000",
                enterprise_name="Demo Cement Ltd",
            )

            flat = project.flats.order_by("flat_number").first()
            create_sale(
                project_id=project.pk,
                flat_id=flat.pk,
                customer_id=customer.pk,
                base_price=5_000_000,
                parking_charge=200_000,
                utility_charge=150_000,
                extra_costs=[{"purpose": "Interior", "amount": 300_000}],
                downpayment=1_000_000,
                monthly_installment=100_000,
                sale_date=today,
            )

            expense = create_expense(
                vendor_id=vendor.pk,
                project_id=project.pk,
                item_id=add_expense_item("Cement").pk,
                quantity=500,
                price=100_000,
                date=today,
            )
            make_payment(expense.pk, amount_to_pay=40_000, payment_date=today)

            record_operating_cost(
                item_id=add_operating_cost_item("Office Rent").pk,
                amount=25_000,
                date=today,
            )

        self.stdout.write(self.style.SUCCESS("Demo data seeded successfully!"))
