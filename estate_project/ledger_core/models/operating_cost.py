from django.core.validators import MinValueValidator
from django.db import models


class OperatingCostItem(models.Model):
    name = models.CharField(max_length=200, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


# Office running costs; not linked to any ledger
class OperatingCost(models.Model):
    date = models.DateField()
    item = models.ForeignKey(
        OperatingCostItem, on_delete=models.PROTECT, related_name="costs"
    )
    amount = models.PositiveBigIntegerField(validators=[MinValueValidator(1)])
    description = models.TextField(blank=True)
    reference = models.CharField(max_length=200, blank=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["date"], name="operating_cost_date_idx"),
        ]

    def __str__(self):
        return f"{self.item_id} {self.date}: {self.amount}"

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
