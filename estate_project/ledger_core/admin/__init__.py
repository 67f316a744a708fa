from .auditlog import AuditLogAdmin
from .expense import (ExpenseAdmin, ExpenseItemAdmin, OperatingCostAdmin,
                      OperatingCostItemAdmin, VendorAdmin)
from .inlines import FlatInline, SaleExtraCostInline
from .project import ProjectAdmin
from .readonly import ReadOnlyAdmin
from .sale import CustomerAdmin, SaleAdmin
from .transaction import InflowTransactionAdmin, OutflowTransactionAdmin
