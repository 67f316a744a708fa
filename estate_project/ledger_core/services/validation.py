from django.core.exceptions import ValidationError

from ..exceptions import InvalidAmount


def is_money(value) -> bool:
    """Whole currency units only; bool is an int subclass but not money."""
    return isinstance(value, int) and not isinstance(value, bool)


def require_amount(value, field: str = "amount") -> int:
    """A payment amount: a whole number greater than 0."""
    if not is_money(value):
        raise InvalidAmount(f"{field} must be a whole number, got {value!r}.")
    if value <= 0:
        raise InvalidAmount(f"{field} must be greater than 0.")
    return value


def require_money(value, field: str, *, allow_none: bool = True) -> int:
    """A non-negative whole number; None counts as 0 when allowed."""
    if value is None and allow_none:
        return 0
    if not is_money(value):
        raise ValidationError(f"{field} must be a whole number, got {value!r}.")
    if value < 0:
        raise ValidationError(f"{field} cannot be negative.")
    return value
