import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Counter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True)),
                ("current", models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(max_length=200)),
                ("mobile", models.CharField(max_length=32)),
                ("address", models.TextField(blank=True)),
                ("nid_number", models.CharField(blank=True, max_length=64)),
            ],
            options={
                "ordering": ["full_name"],
                "indexes": [models.Index(fields=["mobile"], name="customer_mobile_idx")],
            },
        ),
        migrations.CreateModel(
            name="Vendor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("vendor_name", models.CharField(max_length=200)),
                ("phone_number", models.CharField(blank=True, max_length=32)),
                ("enterprise_name", models.CharField(blank=True, max_length=200)),
                ("details", models.TextField(blank=True)),
            ],
            options={
                "ordering": ["vendor_name"],
                "indexes": [models.Index(fields=["vendor_name"], name="vendor_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="ExpenseItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="OperatingCostItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("project_name", models.CharField(max_length=200)),
                ("location", models.CharField(max_length=255)),
                ("total_flats", models.PositiveIntegerField(default=0)),
                ("developer_share", models.PositiveSmallIntegerField(default=100, validators=[django.core.validators.MaxValueValidator(100)])),
                ("landowner_share", models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(100)])),
                ("start_date", models.DateField()),
                ("status", models.CharField(choices=[("Planning", "Planning"), ("Ongoing", "Ongoing"), ("Completed", "Completed")], default="Planning", max_length=20)),
                ("estimated_budget", models.PositiveBigIntegerField(default=0)),
                ("target_sell", models.PositiveBigIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["project_name"],
                "indexes": [models.Index(fields=["status"], name="project_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="Flat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("flat_number", models.CharField(max_length=32)),
                ("flat_size", models.PositiveIntegerField(default=0)),
                ("ownership", models.CharField(choices=[("Developer", "Developer"), ("Landowner", "Landowner")], default="Developer", max_length=20)),
                ("status", models.CharField(choices=[("Available", "Available"), ("Sold", "Sold"), ("Reserved", "Reserved")], default="Available", max_length=20)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="flats", to="ledger_core.project")),
            ],
            options={
                "ordering": ["project", "flat_number"],
                "indexes": [models.Index(fields=["project", "status"], name="flat_project_status_idx")],
                "constraints": [models.UniqueConstraint(fields=("project", "flat_number"), name="uq_flat_project_number")],
            },
        ),
        migrations.CreateModel(
            name="Sale",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("base_price", models.PositiveBigIntegerField()),
                ("per_sft_price", models.PositiveBigIntegerField(default=0)),
                ("parking_charge", models.PositiveBigIntegerField(default=0)),
                ("utility_charge", models.PositiveBigIntegerField(default=0)),
                ("total_price", models.PositiveBigIntegerField(default=0)),
                ("downpayment", models.PositiveBigIntegerField(default=0)),
                ("monthly_installment", models.PositiveBigIntegerField(default=0)),
                ("sale_date", models.DateField()),
                ("note", models.TextField(blank=True)),
                ("deed_link", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("customer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="sales", to="ledger_core.customer")),
                ("flat", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="sales", to="ledger_core.flat")),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="sales", to="ledger_core.project")),
            ],
            options={
                "ordering": ["-sale_date", "-id"],
                "indexes": [
                    models.Index(fields=["customer"], name="sale_customer_idx"),
                    models.Index(fields=["project", "sale_date"], name="sale_project_date_idx"),
                ],
                "constraints": [models.UniqueConstraint(fields=("flat",), name="uq_sale_flat")],
            },
        ),
        migrations.CreateModel(
            name="SaleExtraCost",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("purpose", models.CharField(max_length=200)),
                ("amount", models.PositiveBigIntegerField(default=0)),
                ("position", models.PositiveIntegerField(default=0)),
                ("sale", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="extra_costs", to="ledger_core.sale")),
            ],
            options={"ordering": ["sale", "position", "id"]},
        ),
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("expense_number", models.CharField(max_length=32, unique=True)),
                ("quantity", models.PositiveIntegerField(blank=True, null=True)),
                ("price", models.PositiveBigIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("paid_amount", models.BigIntegerField(default=0)),
                ("status", models.CharField(choices=[("Unpaid", "Unpaid"), ("Partially Paid", "Partially Paid"), ("Paid", "Paid")], default="Unpaid", max_length=20)),
                ("date", models.DateField()),
                ("description", models.TextField(blank=True)),
                ("item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="expenses", to="ledger_core.expenseitem")),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="expenses", to="ledger_core.project")),
                ("vendor", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="expenses", to="ledger_core.vendor")),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["vendor"], name="expense_vendor_idx"),
                    models.Index(fields=["project", "status"], name="expense_project_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("paid_amount__gte", 0)), name="expense_paid_non_negative"),
                    models.CheckConstraint(condition=models.Q(("paid_amount__lte", models.F("price"))), name="expense_paid_within_price"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InflowTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_type", models.CharField(choices=[("Booking", "Booking"), ("Installment", "Installment")], default="Installment", max_length=20)),
                ("payment_purpose", models.CharField(blank=True, choices=[("Booking Money", "Booking Money"), ("Installment", "Installment"), ("Other", "Other")], max_length=20)),
                ("other_purpose", models.CharField(blank=True, max_length=200)),
                ("date", models.DateField()),
                ("amount", models.PositiveBigIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("payment_method", models.CharField(choices=[("Cash", "Cash"), ("Cheque", "Cheque"), ("Bank Transfer", "Bank Transfer")], default="Cash", max_length=20)),
                ("receipt_number", models.CharField(blank=True, max_length=32)),
                ("reference", models.CharField(blank=True, max_length=200)),
                ("customer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="inflow_transactions", to="ledger_core.customer")),
                ("flat", models.ForeignKey(on_delete=django.db.models.deletion.RESTRICT, related_name="inflow_transactions", to="ledger_core.flat")),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="inflow_transactions", to="ledger_core.project")),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["project", "date"], name="inflow_project_date_idx"),
                    models.Index(fields=["customer", "flat"], name="inflow_customer_flat_idx"),
                    models.Index(fields=["receipt_number"], name="inflow_receipt_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OutflowTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.PositiveBigIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("date", models.DateField()),
                ("expense_category", models.CharField(choices=[("Material", "Material"), ("Labor", "Labor"), ("Utility", "Utility"), ("Office", "Office")], default="Material", max_length=20)),
                ("supplier_vendor", models.CharField(blank=True, max_length=200)),
                ("expense_number", models.CharField(blank=True, db_index=True, max_length=32)),
                ("payment_method", models.CharField(choices=[("Cash", "Cash"), ("Cheque", "Cheque"), ("Bank Transfer", "Bank Transfer")], default="Cash", max_length=20)),
                ("reference", models.CharField(blank=True, max_length=200)),
                ("description", models.TextField(blank=True)),
                ("project", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="outflow_transactions", to="ledger_core.project")),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [models.Index(fields=["project", "date"], name="outflow_project_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="OperatingCost",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("amount", models.PositiveBigIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("description", models.TextField(blank=True)),
                ("reference", models.CharField(blank=True, max_length=200)),
                ("item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="costs", to="ledger_core.operatingcostitem")),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [models.Index(fields=["date"], name="operating_cost_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=50)),
                ("object_type", models.CharField(max_length=100)),
                ("object_id", models.CharField(max_length=100)),
                ("changes", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["object_type", "object_id"], name="auditlog_object_idx"),
                    models.Index(fields=["created_at"], name="auditlog_created_idx"),
                ],
            },
        ),
    ]
