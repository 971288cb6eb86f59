from django.http import HttpResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .exceptions import InvalidReportPeriodError
from .serializers import VatReportQuerySerializer, VatReportSerializer, ErrorSerializer
from .services import TaxReportQueries, vat_report_csv, vat_report_filename


REPORT_PARAMETERS = [
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='First day included (default: 30 days ago)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='Last day included'),
    OpenApiParameter('period', OpenApiTypes.STR, description="'daily', 'weekly', 'monthly' or 'yearly'", default='daily'),
]


def _build_report(request):
    query_serializer = VatReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    return TaxReportQueries.vat_report(
        start_date=params['start_date'],
        end_date=params.get('end_date'),
        period=params['period'],
    )


@extend_schema(
    parameters=REPORT_PARAMETERS,
    responses={
        200: VatReportSerializer,
        400: ErrorSerializer,
    },
    description="VAT collected on orders in a date range, grouped by period.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def vat_report(request):
    """VAT report - thin HTTP handler."""
    try:
        report = _build_report(request)
    except InvalidReportPeriodError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(VatReportSerializer(report).data)


@extend_schema(
    parameters=REPORT_PARAMETERS,
    responses={(200, 'text/csv'): OpenApiTypes.STR},
    description="Download the VAT report buckets as CSV.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def vat_report_export(request):
    """VAT report CSV export."""
    try:
        report = _build_report(request)
    except InvalidReportPeriodError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    response = HttpResponse(vat_report_csv(report), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{vat_report_filename(report["period"])}"'
    return response
