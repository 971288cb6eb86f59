"""
Revoke influencer MOQ relaxation where paid orders fall short.

Usage:
    python manage.py process_influencer_compliance
    python manage.py process_influencer_compliance --dry-run
"""

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.checkout.services import active_influencers, paid_orders_since, process_influencer_compliance
from apps.checkout.services.lookups import PAID_ORDERS_WINDOW


class Command(BaseCommand):
    help = 'Revoke MOQ relaxation from influencers below the 30-day paid order threshold'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show who would lose relaxation without making changes',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            self._dry_run()
            return

        result = process_influencer_compliance()

        self.stdout.write(
            self.style.SUCCESS(
                f'Processed {result.processed}/{result.targeted} influencer(s), '
                f'revoked {result.revoked}.'
            )
        )
        for failure in result.failures:
            self.stdout.write(self.style.ERROR(f'  - {failure}'))

    def _dry_run(self):
        threshold = settings.INFLUENCER_MIN_PAID_ORDERS_30D
        since = timezone.now() - PAID_ORDERS_WINDOW

        below = []
        for user in active_influencers():
            paid = paid_orders_since(user_id=user.id, since=since)
            if paid < threshold:
                below.append((user, paid))

        if not below:
            self.stdout.write(self.style.SUCCESS('All active influencers are compliant.'))
            return

        self.stdout.write(f'\nFound {len(below)} influencer(s) below {threshold} paid orders:\n')
        for user, paid in below:
            self.stdout.write(f'  - {user.email} | {paid} paid order(s) in 30 days')
        self.stdout.write(self.style.WARNING('\n--dry-run mode: No changes made.'))
