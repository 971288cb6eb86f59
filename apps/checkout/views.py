from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.groupbuy.serializers import CronErrorSerializer
from apps.groupbuy.views import CronJobView
from apps.orders.exceptions import InvalidVatInputError
from .serializers import (
    # Input serializers
    CheckoutQuoteInputSerializer,
    VatQuerySerializer,
    # Response serializers
    CheckoutPolicySerializer,
    CheckoutQuoteSerializer,
    VatSummarySerializer,
    InfluencerComplianceResponseSerializer,
    ErrorSerializer,
)
from .services import (
    build_checkout_quote,
    evaluate_checkout_policy,
    process_influencer_compliance,
    summarize_vat,
)


def _current_user_id(request):
    return request.user.id if request.user.is_authenticated else None


@extend_schema(
    responses={200: CheckoutPolicySerializer},
    description="Minimum order quantity the current buyer must reach at checkout.",
    tags=['checkout'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def checkout_policy(request):
    """Get the checkout policy for the current buyer - thin HTTP handler."""
    policy = evaluate_checkout_policy(_current_user_id(request))
    return Response(CheckoutPolicySerializer(policy.as_dict()).data)


@extend_schema(
    request=CheckoutQuoteInputSerializer,
    responses={
        200: CheckoutQuoteSerializer,
        400: ErrorSerializer,
    },
    description="Check a cart against the buyer's MOQ and price it with VAT.",
    tags=['checkout'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def checkout_quote(request):
    """Quote a cart - thin HTTP handler."""
    serializer = CheckoutQuoteInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    policy = evaluate_checkout_policy(_current_user_id(request))
    try:
        quote = build_checkout_quote(
            policy=policy,
            total_units=data['total_units'],
            subtotal=data['subtotal'],
        )
    except InvalidVatInputError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(CheckoutQuoteSerializer(quote.as_dict()).data)


@extend_schema(
    parameters=[
        OpenApiParameter('amount', OpenApiTypes.DECIMAL, description='Amount to calculate on', required=True),
        OpenApiParameter('rate', OpenApiTypes.DECIMAL, description='VAT rate in percent (default: platform rate)'),
        OpenApiParameter('inclusive', OpenApiTypes.BOOL, description='Amount already includes VAT', default=False),
    ],
    responses={
        200: VatSummarySerializer,
        400: ErrorSerializer,
    },
    description="Add VAT to an amount, or extract it from a VAT-inclusive total.",
    tags=['checkout'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def vat_calculator(request):
    """VAT calculator - thin HTTP handler."""
    query_serializer = VatQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        summary = summarize_vat(
            amount=params['amount'],
            rate=params.get('rate'),
            inclusive=params['inclusive'],
        )
    except InvalidVatInputError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(VatSummarySerializer(summary).data)


class ProcessInfluencerComplianceView(CronJobView):
    """
    Revoke MOQ relaxation from influencers below the paid-order threshold.

    POST /api/cron/process-influencer-compliance/
    Header: X-Cron-Secret: <secret>
    """

    job_name = 'process-influencer-compliance'

    @extend_schema(
        request=None,
        responses={
            200: InfluencerComplianceResponseSerializer,
            401: CronErrorSerializer,
            500: CronErrorSerializer,
        },
        description="Evaluate active influencers and revoke relaxation where paid orders fall short.",
        tags=['cron'],
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)

    def run(self):
        return process_influencer_compliance().as_dict()
