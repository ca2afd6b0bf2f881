"""
Input checks shared by the action services

Each helper raises ValidationError; services run them before any store access.
"""

from datetime import date, datetime
from decimal import Decimal

from fleet_maintenance.buisness.core.errors import ValidationError
from fleet_maintenance.buisness.core.numeric import ZERO, to_decimal

# largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def require_id(field, value):
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(field, "is required")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"must be an integer id, got {value!r}")
    if number <= 0:
        raise ValidationError(field, f"must be a positive id, got {value!r}")
    return number


def optional_id(field, value):
    if value is None or value == '':
        return None
    return require_id(field, value)


def require_positive_quantity(field, value):
    quantity = to_decimal(value, default=None)
    if quantity is None:
        raise ValidationError(field, f"must be a number, got {value!r}")
    if quantity <= ZERO:
        raise ValidationError(field, f"must be greater than zero, got {value!r}")
    if quantity > MAX_AMOUNT:
        raise ValidationError(field, f"must not exceed {MAX_AMOUNT}, got {value!r}")
    return quantity


def require_choice(field, value, choices):
    if value not in choices:
        raise ValidationError(field, f"must be one of {', '.join(choices)}, got {value!r}")
    return value


def require_text(field, value):
    if value is None or not str(value).strip():
        raise ValidationError(field, "is required")
    return str(value).strip()


def optional_datetime(field, value):
    """Accept a datetime, a date, or an ISO-8601 string"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(field, f"must be an ISO-8601 date, got {value!r}")


def require_datetime(field, value):
    parsed = optional_datetime(field, value)
    if parsed is None:
        raise ValidationError(field, "is required")
    return parsed


def optional_decimal(field, value):
    if value is None or value == '':
        return None
    number = to_decimal(value, default=None)
    if number is None:
        raise ValidationError(field, f"must be a number, got {value!r}")
    if number < ZERO:
        raise ValidationError(field, f"must not be negative, got {value!r}")
    if number > MAX_AMOUNT:
        raise ValidationError(field, f"must not exceed {MAX_AMOUNT}, got {value!r}")
    return number
