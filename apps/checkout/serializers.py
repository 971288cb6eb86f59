"""
Serializers for checkout app.

Input Serializers:
    CheckoutQuoteInputSerializer - Validates a cart submitted for quoting
    VatQuerySerializer - Validates VAT calculator query parameters

Response Serializers:
    CheckoutPolicySerializer - Per-user MOQ requirement
    CheckoutQuoteSerializer - Policy plus MOQ check and VAT breakdown
    VatSummarySerializer - VAT calculator result
    InfluencerComplianceResponseSerializer - Compliance sweep result
"""

from decimal import Decimal

from rest_framework import serializers


# =============================================================================
# Input Serializers
# =============================================================================

class CheckoutQuoteInputSerializer(serializers.Serializer):
    total_units = serializers.IntegerField(min_value=0)
    subtotal = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )


class VatQuerySerializer(serializers.Serializer):
    """
    Validate VAT calculator query parameters.

    Query Parameters:
        amount (decimal): Amount to calculate on
        rate (decimal): VAT rate in percent, defaults to VAT_RATE_PERCENT
        inclusive (bool): Treat amount as a VAT-inclusive total
    """

    amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )
    rate = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False,
    )
    inclusive = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Response Serializers
# =============================================================================

class CheckoutPolicySerializer(serializers.Serializer):
    required_moq = serializers.IntegerField()
    is_influencer = serializers.BooleanField()
    influencer_moq_enabled = serializers.BooleanField()
    paid_orders_last_30d = serializers.IntegerField()


class CheckoutQuoteSerializer(CheckoutPolicySerializer):
    total_units = serializers.IntegerField()
    moq_met = serializers.BooleanField()
    remaining_units = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    vat_rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    vat_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class VatSummarySerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    vat_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    rate = serializers.DecimalField(max_digits=5, decimal_places=2)


class InfluencerComplianceResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    targeted = serializers.IntegerField()
    processed = serializers.IntegerField()
    revoked = serializers.IntegerField()
    failed = serializers.IntegerField()
    failures = serializers.ListField(child=serializers.CharField())


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
