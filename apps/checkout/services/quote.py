"""
Checkout quote: applies the admission policy and VAT to a cart.
"""

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from apps.orders.vat import (
    calculate_vat,
    extract_vat_from_total,
    quantize_money,
    to_decimal,
)
from .policy import CheckoutPolicy


def current_vat_rate() -> Decimal:
    """VAT rate in percent from ``settings.VAT_RATE_PERCENT``."""
    return to_decimal(settings.VAT_RATE_PERCENT, 'VAT_RATE_PERCENT')


@dataclass(frozen=True)
class CheckoutQuote:
    policy: CheckoutPolicy
    total_units: int
    subtotal: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal

    @property
    def moq_met(self) -> bool:
        return self.total_units >= self.policy.required_moq

    @property
    def remaining_units(self) -> int:
        return max(0, self.policy.required_moq - self.total_units)

    def as_dict(self) -> dict:
        return {
            **self.policy.as_dict(),
            'total_units': self.total_units,
            'moq_met': self.moq_met,
            'remaining_units': self.remaining_units,
            'subtotal': self.subtotal,
            'vat_rate': self.vat_rate,
            'vat_amount': self.vat_amount,
            'total': self.total,
        }


def build_checkout_quote(*, policy: CheckoutPolicy, total_units: int, subtotal, vat_rate=None) -> CheckoutQuote:
    """
    Quote a cart of ``total_units`` units worth ``subtotal`` before VAT.

    Raises:
        InvalidVatInputError: If subtotal or rate is negative or not a number.
    """
    rate = current_vat_rate() if vat_rate is None else to_decimal(vat_rate, 'rate')
    subtotal = quantize_money(to_decimal(subtotal, 'subtotal'))
    vat_amount = quantize_money(calculate_vat(subtotal, rate))

    return CheckoutQuote(
        policy=policy,
        total_units=total_units,
        subtotal=subtotal,
        vat_rate=rate,
        vat_amount=vat_amount,
        total=subtotal + vat_amount,
    )


def summarize_vat(*, amount, rate=None, inclusive=False) -> dict:
    """
    VAT summary for a single amount.

    With ``inclusive`` the amount is a gross total and VAT is extracted from
    it; otherwise VAT is added on top.
    """
    rate = current_vat_rate() if rate is None else to_decimal(rate, 'rate')
    amount = to_decimal(amount, 'amount')

    if inclusive:
        breakdown = extract_vat_from_total(amount, rate)
        subtotal = quantize_money(breakdown.subtotal)
        return {
            'subtotal': subtotal,
            'vat_amount': quantize_money(amount) - subtotal,
            'total': quantize_money(amount),
            'rate': rate,
        }

    vat_amount = quantize_money(calculate_vat(amount, rate))
    subtotal = quantize_money(amount)
    return {
        'subtotal': subtotal,
        'vat_amount': vat_amount,
        'total': subtotal + vat_amount,
        'rate': rate,
    }
