"""
VAT Arithmetic
==============

Pure functions for reconciling tax-exclusive and tax-inclusive amounts.
Shared by the checkout quote and the admin VAT report.

All arithmetic runs on ``Decimal``. Floats are converted through ``str()``
so ``7.5`` becomes exactly ``Decimal('7.5')`` rather than its binary
approximation.

Example::

    calculate_vat(200, 10)                  # == Decimal('20')
    calculate_total_with_vat(100, '7.5')    # == Decimal('107.5')
    extract_vat_from_total('107.5', '7.5')  # subtotal == 100, vat_amount == 7.5
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import NamedTuple, Union

from .exceptions import InvalidVatInputError

Number = Union[Decimal, int, float, str]

HUNDRED = Decimal('100')
CENT = Decimal('0.01')


class VatBreakdown(NamedTuple):
    """Tax-exclusive subtotal and the VAT contained in a gross total."""

    subtotal: Decimal
    vat_amount: Decimal


def to_decimal(value: Number, field: str = 'value') -> Decimal:
    """Convert a numeric input to a finite, non-negative Decimal."""
    if isinstance(value, bool):
        raise InvalidVatInputError(f"{field} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidVatInputError(f"{field} must be a number, got {value!r}")

    if not result.is_finite():
        raise InvalidVatInputError(f"{field} must be finite, got {value!r}")
    if result < 0:
        raise InvalidVatInputError(f"{field} must not be negative, got {value!r}")
    return result


def calculate_vat(amount: Number, rate: Number) -> Decimal:
    """Return the VAT due on a tax-exclusive ``amount`` at ``rate`` percent."""
    amount = to_decimal(amount, 'amount')
    rate = to_decimal(rate, 'rate')
    return amount * (rate / HUNDRED)


def calculate_total_with_vat(amount: Number, rate: Number) -> Decimal:
    """Return ``amount`` plus the VAT due on it."""
    amount = to_decimal(amount, 'amount')
    return amount + calculate_vat(amount, rate)


def extract_vat_from_total(total: Number, rate: Number) -> VatBreakdown:
    """
    Split a tax-inclusive ``total`` into subtotal and VAT.

    Inverse of :func:`calculate_total_with_vat`:
    ``extract_vat_from_total(calculate_total_with_vat(x, r), r)`` gives back
    ``(x, calculate_vat(x, r))``.
    """
    total = to_decimal(total, 'total')
    rate = to_decimal(rate, 'rate')
    subtotal = total / (1 + rate / HUNDRED)
    return VatBreakdown(subtotal=subtotal, vat_amount=total - subtotal)


def quantize_money(value: Number) -> Decimal:
    """Round to two decimal places for display and storage."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
