from django.core.exceptions import ValidationError
from django.db import models
from .customer import Customer
from .project import Flat, Project


# ---------- Sales / SaleExtraCosts ----------

# Header: one flat sold to one customer
class Sale(models.Model):
    project = models.ForeignKey(
        Project, on_delete=models.PROTECT, related_name="sales"
    )
    # A flat can carry at most one sale (see uq_sale_flat)
    flat = models.ForeignKey(
        Flat, on_delete=models.PROTECT, related_name="sales"
    )
    customer = models.ForeignKey(
        Customer, on_delete=models.PROTECT, related_name="sales"
    )

    # Agreed price before charges and extra costs
    base_price = models.PositiveBigIntegerField()
    per_sft_price = models.PositiveBigIntegerField(default=0)
    parking_charge = models.PositiveBigIntegerField(default=0)
    utility_charge = models.PositiveBigIntegerField(default=0)

    # base_price + parking_charge + utility_charge + sum(extra_costs)
    total_price = models.PositiveBigIntegerField(default=0)

    downpayment = models.PositiveBigIntegerField(default=0)
    monthly_installment = models.PositiveBigIntegerField(default=0)

    sale_date = models.DateField()
    note = models.TextField(blank=True)
    # Link to the scanned deed
    deed_link = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-sale_date", "-id"]
        indexes = [
            models.Index(fields=["customer"], name="sale_customer_idx"),
            models.Index(fields=["project", "sale_date"], name="sale_project_date_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["flat"], name="uq_sale_flat"),
        ]

    def __str__(self):
        return f"Sale: {self.pk} ({self.flat_id})"

    @staticmethod
    def compute_total(base_price, parking_charge=0, utility_charge=0,
                      extra_costs=()):
        """Sum of the base price, both charges and every extra cost amount.

        ``extra_costs`` holds mappings with an ``amount`` key or
        SaleExtraCost rows. Missing values count as 0.
        """
        extras = 0
        for cost in extra_costs:
            amount = (cost.get("amount") if isinstance(cost, dict)
                      else cost.amount)
            extras += amount or 0
        return ((base_price or 0) + (parking_charge or 0)
                + (utility_charge or 0) + extras)

    def extra_costs_total(self):
        return sum(cost.amount for cost in self.extra_costs.all())

    def recalc_total(self):
        """Recompute total_price from stored fields and extra cost lines."""
        self.total_price = Sale.compute_total(
            self.base_price, self.parking_charge, self.utility_charge,
            self.extra_costs.all() if self.pk else (),
        )
        return self.total_price

    def clean(self):
        if not self.base_price or self.base_price <= 0:
            raise ValidationError("Base price must be greater than 0.")
        # The flat must sit in the sale's project
        flat_project = getattr(self, "flat", None) and self.flat.project_id
        if flat_project and flat_project != self.project_id:
            raise ValidationError("Flat must belong to the sale's project.")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


# Detail line: one itemized extra cost (e.g. "Interior")
class SaleExtraCost(models.Model):
    sale = models.ForeignKey(
        Sale, on_delete=models.CASCADE, related_name="extra_costs"
    )
    purpose = models.CharField(max_length=200)
    amount = models.PositiveBigIntegerField(default=0)
    # Preserves the order lines were entered in
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sale", "position", "id"]

    def __str__(self):
        return f"{self.purpose}: {self.amount}"
