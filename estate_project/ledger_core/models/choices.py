PROJECT_STATUS_CHOICES = [
    ("Planning", "Planning"),
    ("Ongoing", "Ongoing"),
    ("Completed", "Completed"),
]

FLAT_OWNERSHIP_CHOICES = [
    ("Developer", "Developer"),
    ("Landowner", "Landowner"),
]

FLAT_STATUS_CHOICES = [
    ("Available", "Available"),
    ("Sold", "Sold"),
    ("Reserved", "Reserved"),
]

PAYMENT_METHOD_CHOICES = [
    ("Cash", "Cash"),
    ("Cheque", "Cheque"),
    ("Bank Transfer", "Bank Transfer"),
]

INFLOW_TYPE_CHOICES = [
    ("Booking", "Booking"),
    ("Installment", "Installment"),
]

PAYMENT_PURPOSE_CHOICES = [
    ("Booking Money", "Booking Money"),
    ("Installment", "Installment"),
    ("Other", "Other"),
]

OUTFLOW_CATEGORY_CHOICES = [
    ("Material", "Material"),
    ("Labor", "Labor"),
    ("Utility", "Utility"),
    ("Office", "Office"),
]

EXPENSE_STATUS_CHOICES = [
    ("Unpaid", "Unpaid"),
    ("Partially Paid", "Partially Paid"),
    ("Paid", "Paid"),
]
