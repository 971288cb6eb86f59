"""
Group-buy signals.

Notification delivery lives outside this project and hooks onto these.
"""
from django.dispatch import Signal


# Sent once per commitment the deadline sweeper moved to payment_window_expired.
# kwargs: commitment_id, cutoff
commitment_expired = Signal()


def allow_cron_cross_origin(sender, request, **kwargs):
    """Open scheduler endpoints to any origin (django-cors-headers hook)."""
    return request.path.startswith('/api/cron/')
