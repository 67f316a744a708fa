from django.db import models


# Named sequences (expense numbers, receipt numbers).
# Rows are read and bumped under select_for_update().
class Counter(models.Model):
    name = models.CharField(max_length=50, unique=True)
    current = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.name}={self.current}"
