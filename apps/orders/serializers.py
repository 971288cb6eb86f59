"""
Serializers for orders app.

Input Serializers:
    VatReportQuerySerializer - Validates VAT report query parameters

Response Serializers:
    VatReportSerializer - VAT totals and per-period buckets
"""

from datetime import timedelta

from django.utils import timezone
from rest_framework import serializers

from .services import REPORT_PERIODS


# =============================================================================
# Input Serializers
# =============================================================================

class VatReportQuerySerializer(serializers.Serializer):
    """
    Validate VAT report query parameters.

    Query Parameters:
        start_date (date): First day included, defaults to 30 days ago
        end_date (date): Last day included, open-ended if omitted
        period (str): daily, weekly, monthly or yearly
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    period = serializers.ChoiceField(
        choices=list(REPORT_PERIODS),
        required=False,
        default='daily',
    )

    def validate(self, attrs):
        if not attrs.get('start_date'):
            attrs['start_date'] = timezone.localdate() - timedelta(days=30)

        end_date = attrs.get('end_date')
        if end_date and end_date < attrs['start_date']:
            raise serializers.ValidationError({
                'end_date': 'end_date must not be before start_date.'
            })
        return attrs


# =============================================================================
# Response Serializers
# =============================================================================

class VatBucketSerializer(serializers.Serializer):
    name = serializers.CharField()
    value = serializers.DecimalField(max_digits=14, decimal_places=2)


class VatReportSerializer(serializers.Serializer):
    period = serializers.CharField()
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    total_tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    average_tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    buckets = VatBucketSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
