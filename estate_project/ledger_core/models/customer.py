from django.db import models


# ---------- Customer ----------
# A flat buyer; referenced by Sale and InflowTransaction
class Customer(models.Model):
    full_name = models.CharField(max_length=200)
    mobile = models.CharField(max_length=32)
    address = models.TextField(blank=True)
    # National ID card number
    nid_number = models.CharField(max_length=64, blank=True)

    class Meta:
        ordering = ["full_name"]
        indexes = [
            models.Index(fields=["mobile"], name="customer_mobile_idx"),
        ]

    def __str__(self):
        return self.full_name
