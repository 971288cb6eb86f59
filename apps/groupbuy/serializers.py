from rest_framework import serializers


# =============================================================================
# Response Serializers (API documentation)
# =============================================================================

class CronErrorSerializer(serializers.Serializer):
    """Error body returned by scheduler endpoints."""

    error = serializers.CharField()


class PaymentDeadlineSweepResponseSerializer(serializers.Serializer):
    """Result of one payment-deadline sweep."""

    success = serializers.BooleanField()
    expiredCommitments = serializers.IntegerField(min_value=0)
