"""
Permission classes for scheduler-driven endpoints.

The external scheduler authenticates with a shared secret sent in the
``X-Cron-Secret`` header. It is compared in constant time against
``settings.CRON_SECRET``. An empty or missing server secret refuses
every call.

Usage:
    class ProcessPaymentDeadlinesView(CronJobView):
        permission_classes = [HasCronSecret]
"""
import hmac

from django.conf import settings
from rest_framework.permissions import BasePermission


CRON_SECRET_HEADER = 'X-Cron-Secret'


def has_valid_cron_secret(request):
    """Return True only when both sides hold a secret and they match."""
    expected = getattr(settings, 'CRON_SECRET', '') or ''
    provided = request.headers.get(CRON_SECRET_HEADER) or ''

    if not expected or not provided:
        return False

    return hmac.compare_digest(provided.encode('utf-8'), expected.encode('utf-8'))


class HasCronSecret(BasePermission):
    """
    Permission requiring a valid scheduler secret.

    Preflight (OPTIONS) requests pass through so browsers can negotiate
    CORS; they never reach a job.
    """

    message = 'Unauthorized: Invalid cron secret'

    def has_permission(self, request, view):
        if request.method == 'OPTIONS':
            return True
        return has_valid_cron_secret(request)
