import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .exceptions import CronSecretInvalid
from .permissions import HasCronSecret
from .serializers import CronErrorSerializer, PaymentDeadlineSweepResponseSerializer
from .services import sweep_payment_deadlines

logger = logging.getLogger(__name__)


CRON_CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type, x-cron-secret',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
}


class CronJobView(APIView):
    """
    Base view for jobs triggered by the external scheduler.

    Contract shared by every job:
        OPTIONS -> 200, empty body, permissive CORS headers
        POST without a valid X-Cron-Secret -> 401 {"error": "Unauthorized: Invalid cron secret"}
        POST with an unexpected failure -> 500 {"error": "<message>"}
        POST success -> 200 with the body built by ``run()``

    Session/JWT authentication is disabled; the shared secret is the only
    credential accepted.
    """

    authentication_classes = []
    permission_classes = [HasCronSecret]
    job_name = 'cron-job'

    def run(self):
        """Execute the job and return the JSON-serialisable success body."""
        raise NotImplementedError

    def post(self, request, *args, **kwargs):
        return Response(self.run(), status=status.HTTP_200_OK)

    def options(self, request, *args, **kwargs):
        return Response(status=status.HTTP_200_OK, headers=CRON_CORS_HEADERS)

    def permission_denied(self, request, message=None, code=None):
        logger.warning(
            "[%s] Unauthorized: Invalid or missing X-Cron-Secret header",
            self.job_name,
        )
        raise CronSecretInvalid()

    def handle_exception(self, exc):
        if isinstance(exc, CronSecretInvalid):
            return Response(
                {'error': str(exc.detail)},
                status=exc.status_code,
            )
        if isinstance(exc, APIException):
            return super().handle_exception(exc)

        logger.error("[%s] Job failed: %s", self.job_name, exc, exc_info=exc)
        return Response(
            {'error': str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class ProcessPaymentDeadlinesView(CronJobView):
    """
    Expire unpaid commitments whose payment window has lapsed.

    POST /api/cron/process-payment-deadlines/
    Header: X-Cron-Secret: <secret>
    """

    job_name = 'process-payment-deadlines'

    @extend_schema(
        request=None,
        responses={
            200: PaymentDeadlineSweepResponseSerializer,
            401: CronErrorSerializer,
            500: CronErrorSerializer,
        },
        description="Expire unpaid commitments whose payment deadline has passed.",
        tags=['cron'],
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)

    def run(self):
        result = sweep_payment_deadlines()
        return {
            'success': True,
            'expiredCommitments': result.expired,
        }
