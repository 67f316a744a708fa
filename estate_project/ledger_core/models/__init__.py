from .auditlog import AuditLog
from .counter import Counter
from .customer import Customer
from .expense import Expense, ExpenseItem
from .operating_cost import OperatingCost, OperatingCostItem
from .project import Flat, Project
from .sale import Sale, SaleExtraCost
from .transaction import InflowTransaction, OutflowTransaction
from .vendor import Vendor
