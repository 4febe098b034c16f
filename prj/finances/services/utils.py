"""
finances/services/utils.py
──────────────────────────
Shared helpers used by every billing service module.
Nothing here imports from other service modules (no circular imports).
"""

from decimal import Decimal, InvalidOperation

from django.utils import timezone
from django.utils.dateparse import parse_date

from ..exceptions import InvalidArgument, PermissionDenied

CENT = Decimal('0.01')
# Money columns are DecimalField(max_digits=12, decimal_places=2).
MAX_AMOUNT = Decimal(10) ** 10


def check_billing_rights(actor):
    """
    Raise PermissionDenied unless *actor* may mutate billing data.
    A None actor means a trusted in-process caller (management command,
    payment webhook) and is always allowed.
    """
    if actor is None:
        return
    if not getattr(actor, 'can_manage_billing', False):
        raise PermissionDenied(f'{actor} may not change tuition billing data.')


def to_amount(value, field='amount'):
    """
    Coerce *value* (int, str, Decimal) into a Decimal rounded to the cent.
    Floats go through str() so 0.1 stays 0.10.  Amounts must fit the
    money columns (12 digits, 2 of them decimals).
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgument(f'{field} must be a number.')
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidArgument(f'{field} must be a finite number.')
        amount = amount.quantize(CENT)
    except (InvalidOperation, ValueError):
        raise InvalidArgument(f'{field} must be a number, got {value!r}.')
    check_amount_range(amount, field)
    return amount


def check_amount_range(amount, field='amount'):
    if abs(amount) >= MAX_AMOUNT:
        raise InvalidArgument(f'{field} {amount} is out of range (must be below {MAX_AMOUNT}).')


def check_length(value, model, field, label=None):
    """Raise InvalidArgument when *value* is longer than model.field allows."""
    max_length = model._meta.get_field(field).max_length
    if max_length and value and len(value) > max_length:
        raise InvalidArgument(f'{label or field} must be at most {max_length} characters.')
    return value


def clean_date(value):
    """Accept a date or an ISO "YYYY-MM-DD" string; empty means today."""
    if value is None or value == '':
        return timezone.localdate()
    if isinstance(value, str):
        try:
            parsed = parse_date(value.strip())
        except ValueError:
            parsed = None
        if parsed is None:
            raise InvalidArgument(f'Invalid date {value!r}.')
        return parsed
    return value
