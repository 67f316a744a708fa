from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models
from ..managers import FlatManager
from .choices import (FLAT_OWNERSHIP_CHOICES, FLAT_STATUS_CHOICES,
                      PROJECT_STATUS_CHOICES)


# ---------- Project ----------
# A building under development; owns its flats and both cash logs
class Project(models.Model):
    project_name = models.CharField(max_length=200)
    location = models.CharField(max_length=255)

    # Planned number of flats (the actual rows live in Flat)
    total_flats = models.PositiveIntegerField(default=0)

    # Split of flats between developer and landowner, must sum to 100
    developer_share = models.PositiveSmallIntegerField(
        default=100, validators=[MaxValueValidator(100)]
    )
    landowner_share = models.PositiveSmallIntegerField(
        default=0, validators=[MaxValueValidator(100)]
    )

    start_date = models.DateField()
    status = models.CharField(
        max_length=20, choices=PROJECT_STATUS_CHOICES, default="Planning"
    )

    # Whole currency units
    estimated_budget = models.PositiveBigIntegerField(default=0)
    target_sell = models.PositiveBigIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["project_name"]
        indexes = [
            models.Index(fields=["status"], name="project_status_idx"),
        ]

    def __str__(self):
        return self.project_name

    def clean(self):
        if self.developer_share + self.landowner_share != 100:
            raise ValidationError(
                "Developer and landowner shares must sum to 100.")

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)


# ---------- Flat ----------
# A unit inside a project
class Flat(models.Model):
    project = models.ForeignKey(
        Project, on_delete=models.CASCADE, related_name="flats"
    )
    flat_number = models.CharField(max_length=32)
    # Size in square feet
    flat_size = models.PositiveIntegerField(default=0)
    ownership = models.CharField(
        max_length=20, choices=FLAT_OWNERSHIP_CHOICES, default="Developer"
    )

    # Available -> Sold through a Sale, Sold -> Available when
    # the sale is deleted or moved to another flat
    status = models.CharField(
        max_length=20, choices=FLAT_STATUS_CHOICES, default="Available"
    )

    objects = FlatManager()

    class Meta:
        ordering = ["project", "flat_number"]
        indexes = [
            models.Index(fields=["project", "status"], name="flat_project_status_idx"),
        ]
        constraints = [
            # Flat numbers are unique inside a project
            models.UniqueConstraint(
                fields=["project", "flat_number"],
                name="uq_flat_project_number"
            ),
        ]

    def __str__(self):
        return f"{self.project_id}/{self.flat_number}"

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
