from django.core.exceptions import ObjectDoesNotExist, ValidationError


class InvalidAmount(ValidationError):
    """Raised when a payment would push paid_amount outside [0, price],
    or when a payment amount is not positive."""
    pass


class NotAssociated(ValidationError):
    """Raised when a deletion target lacks the linkage needed to reconcile it."""
    pass


class FlatNotAvailable(ValidationError):
    """Raised when a sale targets a flat that is not Available."""
    pass


class NotFound(ObjectDoesNotExist):
    """Raised when a referenced record does not exist at write time."""
    pass


class StoreFailure(Exception):
    """Raised when the database rejects a write (connection, lock, integrity)."""
    pass
