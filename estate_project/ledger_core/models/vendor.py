from django.db import models


# ---------- Vendor ----------
# A supplier that bills expenses (Accounts Payable side)
class Vendor(models.Model):
    vendor_name = models.CharField(max_length=200)
    phone_number = models.CharField(max_length=32, blank=True)
    enterprise_name = models.CharField(max_length=200, blank=True)
    details = models.TextField(blank=True)

    class Meta:
        ordering = ["vendor_name"]
        indexes = [
            models.Index(fields=["vendor_name"], name="vendor_name_idx"),
        ]

    def __str__(self):
        return self.vendor_name
