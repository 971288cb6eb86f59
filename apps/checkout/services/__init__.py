"""
Checkout app services layer.

Usage:
    from apps.checkout.services import evaluate_checkout_policy, build_checkout_quote

    policy = evaluate_checkout_policy(request.user.id)
    quote = build_checkout_quote(policy=policy, total_units=3, subtotal='90000')
"""

from .policy import (
    CheckoutPolicy,
    default_policy,
    evaluate_checkout_policy,
    get_policy_lookup,
    standard_moq,
)
from .lookups import fetch_checkout_policy_row, paid_orders_since
from .quote import CheckoutQuote, build_checkout_quote, current_vat_rate, summarize_vat
from .influencer_compliance import (
    ComplianceDecision,
    ComplianceResult,
    active_influencers,
    evaluate_influencer_compliance,
    process_influencer_compliance,
)

__all__ = [
    # Policy
    'CheckoutPolicy',
    'default_policy',
    'evaluate_checkout_policy',
    'get_policy_lookup',
    'standard_moq',
    # Lookups
    'fetch_checkout_policy_row',
    'paid_orders_since',
    # Quote
    'CheckoutQuote',
    'build_checkout_quote',
    'current_vat_rate',
    'summarize_vat',
    # Influencer compliance
    'ComplianceDecision',
    'ComplianceResult',
    'active_influencers',
    'evaluate_influencer_compliance',
    'process_influencer_compliance',
]
