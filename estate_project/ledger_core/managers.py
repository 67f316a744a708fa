from django.db import models


# -----------------------------------------
# Scope records that live under a project
# (flats, inflow and outflow transactions)
# -----------------------------------------
class ProjectScopedQuerySet(models.QuerySet):
    def for_project(self, project):
        return self.filter(project=project)

    # Records with no project (office / general costs)
    def general(self):
        return self.filter(project__isnull=True)


class ProjectScopedManager(models.Manager):
    def get_queryset(self):
        return ProjectScopedQuerySet(self.model, using=self._db)

    def for_project(self, project):
        return self.get_queryset().for_project(project)

    def general(self):
        return self.get_queryset().general()


class FlatQuerySet(ProjectScopedQuerySet):
    def available(self):
        return self.filter(status="Available")

    def sold(self):
        return self.filter(status="Sold")


class FlatManager(ProjectScopedManager):
    def get_queryset(self):
        return FlatQuerySet(self.model, using=self._db)

    def available(self):
        return self.get_queryset().available()

    def sold(self):
        return self.get_queryset().sold()


# Expenses that still accept payments
class ExpenseQuerySet(models.QuerySet):
    def payable(self):
        return self.filter(status__in=["Unpaid", "Partially Paid"])

    def for_vendor(self, vendor):
        return self.filter(vendor=vendor)

    # Look up by the human-readable number (e.g. "EXID-0100")
    def by_number(self, expense_number):
        return self.get(expense_number=expense_number)


class ExpenseManager(models.Manager):
    def get_queryset(self):
        return ExpenseQuerySet(self.model, using=self._db)

    def payable(self):
        return self.get_queryset().payable()

    def for_vendor(self, vendor):
        return self.get_queryset().for_vendor(vendor)

    def by_number(self, expense_number):
        return self.get_queryset().by_number(expense_number)
