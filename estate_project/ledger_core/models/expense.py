from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from ..managers import ExpenseManager
from .choices import EXPENSE_STATUS_CHOICES
from .project import Project
from .vendor import Vendor


# ---------- Expense items (reference list) ----------
class ExpenseItem(models.Model):
    name = models.CharField(max_length=200, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


# ---------- Expense ----------
# A vendor bill against a project. Paid down by OutflowTransactions
# linked through expense_number.
class Expense(models.Model):
    # Human-readable key, e.g. "EXID-0100"
    expense_number = models.CharField(max_length=32, unique=True)

    vendor = models.ForeignKey(
        Vendor, on_delete=models.PROTECT, related_name="expenses"
    )
    project = models.ForeignKey(
        Project, on_delete=models.PROTECT, related_name="expenses"
    )
    item = models.ForeignKey(
        ExpenseItem, on_delete=models.PROTECT, related_name="expenses"
    )

    quantity = models.PositiveIntegerField(null=True, blank=True)
    # Total billed
    price = models.PositiveBigIntegerField(validators=[MinValueValidator(1)])
    # Cumulative of linked payments, 0 <= paid_amount <= price
    paid_amount = models.BigIntegerField(default=0)
    status = models.CharField(
        max_length=20, choices=EXPENSE_STATUS_CHOICES, default="Unpaid"
    )

    date = models.DateField()
    description = models.TextField(blank=True)

    objects = ExpenseManager()

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["vendor"], name="expense_vendor_idx"),
            models.Index(fields=["project", "status"], name="expense_project_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(paid_amount__gte=0),
                name="expense_paid_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(paid_amount__lte=models.F("price")),
                name="expense_paid_within_price",
            ),
        ]

    def __str__(self):
        return self.expense_number

    @staticmethod
    def derive_status(paid_amount, price):
        """Unpaid at 0 or below, Paid at or above price, else Partially Paid."""
        if paid_amount <= 0:
            return "Unpaid"
        if paid_amount >= price:
            return "Paid"
        return "Partially Paid"

    @property
    def due_amount(self):
        return self.price - self.paid_amount

    def clean(self):
        if self.paid_amount < 0:
            raise ValidationError("Paid amount cannot be negative.")
        if self.price is not None and self.paid_amount > self.price:
            raise ValidationError("Paid amount cannot exceed the price.")
        # Status always follows paid_amount
        if self.price is not None:
            expected = Expense.derive_status(self.paid_amount, self.price)
            if self.status != expected:
                raise ValidationError(
                    f"Status must be {expected!r} for paid amount "
                    f"{self.paid_amount} of {self.price}.")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
