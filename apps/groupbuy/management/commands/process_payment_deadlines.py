"""
Expire unpaid commitments whose payment deadline has passed.

Same job the scheduler triggers over HTTP, for manual runs and
backlog draining.

Usage:
    python manage.py process_payment_deadlines
    python manage.py process_payment_deadlines --dry-run
    python manage.py process_payment_deadlines --batch-size 500 --max-batches 50
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.groupbuy.exceptions import InvalidSweepConfigurationError
from apps.groupbuy.services import expirable_commitments, sweep_payment_deadlines


class Command(BaseCommand):
    help = 'Expire unpaid commitments whose payment deadline has passed'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be expired without making changes',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=None,
            help='Commitments selected per page (default: GROUPBUY_SWEEP_BATCH_SIZE)',
        )
        parser.add_argument(
            '--max-batches',
            type=int,
            default=None,
            help='Pages processed in this run (default: GROUPBUY_SWEEP_MAX_BATCHES)',
        )

    def handle(self, *args, **options):
        now = timezone.now()

        if options['dry_run']:
            pending = expirable_commitments(cutoff=now).select_related('campaign', 'user')
            count = pending.count()

            if count == 0:
                self.stdout.write(self.style.SUCCESS('No commitments past their payment deadline.'))
                return

            self.stdout.write(f'\nFound {count} commitment(s) past their payment deadline:\n')
            for commitment in pending.order_by('payment_deadline', 'id'):
                self.stdout.write(
                    f'  - {commitment.id} | {commitment.campaign.title} | '
                    f'{commitment.user.email} | deadline {commitment.payment_deadline.isoformat()}'
                )
            self.stdout.write(self.style.WARNING('\n--dry-run mode: No changes made.'))
            return

        try:
            result = sweep_payment_deadlines(
                now=now,
                batch_size=options['batch_size'],
                max_batches=options['max_batches'],
            )
        except InvalidSweepConfigurationError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(f'Expired {result.expired} commitment(s).')
        )
        if result.skipped:
            self.stdout.write(f'Skipped {result.skipped} already handled.')
        if result.failed:
            self.stdout.write(
                self.style.ERROR(f'Failed to update {result.failed} commitment(s).')
            )
