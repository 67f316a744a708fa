from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from ..managers import ProjectScopedManager
from .choices import (INFLOW_TYPE_CHOICES, OUTFLOW_CATEGORY_CHOICES,
                      PAYMENT_METHOD_CHOICES, PAYMENT_PURPOSE_CHOICES)
from .customer import Customer
from .project import Flat, Project


# ---------- Cash inflow log ----------
# Money received from a customer for a flat
class InflowTransaction(models.Model):
    project = models.ForeignKey(
        Project, on_delete=models.CASCADE, related_name="inflow_transactions"
    )
    # RESTRICT lets a project delete cascade through, but blocks
    # deleting the flat on its own
    flat = models.ForeignKey(
        Flat, on_delete=models.RESTRICT, related_name="inflow_transactions"
    )
    customer = models.ForeignKey(
        Customer, on_delete=models.PROTECT,
        related_name="inflow_transactions"
    )

    payment_type = models.CharField(
        max_length=20, choices=INFLOW_TYPE_CHOICES, default="Installment"
    )
    payment_purpose = models.CharField(
        max_length=20, choices=PAYMENT_PURPOSE_CHOICES, blank=True
    )
    # Only used when payment_purpose is "Other"
    other_purpose = models.CharField(max_length=200, blank=True)

    date = models.DateField()
    amount = models.PositiveBigIntegerField(validators=[MinValueValidator(1)])
    payment_method = models.CharField(
        max_length=20, choices=PAYMENT_METHOD_CHOICES, default="Cash"
    )
    # Printed on the money receipt, e.g. "RCPT-000123"
    receipt_number = models.CharField(max_length=32, blank=True)
    reference = models.CharField(max_length=200, blank=True)

    objects = ProjectScopedManager()

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["project", "date"], name="inflow_project_date_idx"),
            models.Index(fields=["customer", "flat"], name="inflow_customer_flat_idx"),
            models.Index(fields=["receipt_number"], name="inflow_receipt_idx"),
        ]

    def __str__(self):
        return f"Inflow {self.receipt_number or self.pk}: {self.amount}"

    @property
    def purpose_display(self):
        if self.payment_purpose == "Other":
            return self.other_purpose
        return self.payment_purpose

    def clean(self):
        if self.payment_purpose == "Other" and not self.other_purpose:
            raise ValidationError(
                "Describe the purpose when payment purpose is 'Other'.")
        flat_project = getattr(self, "flat", None) and self.flat.project_id
        if flat_project and flat_project != self.project_id:
            raise ValidationError("Flat must belong to the payment's project.")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


# ---------- Cash outflow log ----------
# Money paid out. Without a project it is a general / office cost.
class OutflowTransaction(models.Model):
    project = models.ForeignKey(
        Project,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="outflow_transactions",
    )
    amount = models.PositiveBigIntegerField(validators=[MinValueValidator(1)])
    date = models.DateField()
    expense_category = models.CharField(
        max_length=20, choices=OUTFLOW_CATEGORY_CHOICES, default="Material"
    )
    # Vendor name copied at write time
    supplier_vendor = models.CharField(max_length=200, blank=True)

    # Links back to Expense.expense_number; blank for standalone outflows
    expense_number = models.CharField(max_length=32, blank=True, db_index=True)

    payment_method = models.CharField(
        max_length=20, choices=PAYMENT_METHOD_CHOICES, default="Cash"
    )
    reference = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)

    objects = ProjectScopedManager()

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["project", "date"], name="outflow_project_date_idx"),
        ]

    def __str__(self):
        return f"Outflow {self.pk}: {self.amount}"

    @property
    def is_linked(self):
        return bool(self.expense_number)

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
