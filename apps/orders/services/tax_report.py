"""
VAT Reporting Queries
=====================

Aggregations over collected VAT for the admin tax report.

Only orders with a recorded ``tax`` are included; orders placed before VAT
collection began carry ``tax = NULL`` and are left out of both the totals
and the buckets.

Usage:
    from apps.orders.services import TaxReportQueries

    report = TaxReportQueries.vat_report(
        start_date=date(2025, 1, 1),
        end_date=date(2025, 3, 31),
        period='monthly',
    )
"""

import csv
import io
from datetime import date
from decimal import Decimal

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce, TruncDay, TruncMonth, TruncWeek, TruncYear

from apps.orders.exceptions import InvalidReportPeriodError
from apps.orders.models import Order
from apps.orders.vat import quantize_money


REPORT_PERIODS = {
    'daily': TruncDay,
    'weekly': TruncWeek,
    'monthly': TruncMonth,
    'yearly': TruncYear,
}


def bucket_label(moment, period):
    """Sortable label for a truncated timestamp."""
    if period == 'daily':
        return moment.strftime('%Y-%m-%d')
    if period == 'weekly':
        iso_year, iso_week, _ = moment.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if period == 'monthly':
        return moment.strftime('%Y-%m')
    return moment.strftime('%Y')


class TaxReportQueries:
    """Query methods for the VAT report."""

    @staticmethod
    def taxed_orders(start_date=None, end_date=None):
        """Orders with recorded VAT created within the inclusive date range."""
        orders = Order.objects.filter(tax__isnull=False)
        if start_date:
            orders = orders.filter(created_at__date__gte=start_date)
        if end_date:
            orders = orders.filter(created_at__date__lte=end_date)
        return orders

    @staticmethod
    def vat_report(start_date=None, end_date=None, period='daily'):
        """
        Summarise VAT collected in a date range.

        Args:
            start_date (date, optional): First day included.
            end_date (date, optional): Last day included.
            period (str): Bucket size, one of 'daily', 'weekly', 'monthly',
                'yearly'. Defaults to 'daily'.

        Returns:
            dict: Dictionary containing:
                - period (str): The bucket size used.
                - start_date, end_date (date | None): The range requested.
                - total_tax (Decimal): VAT collected in the range.
                - total_orders (int): Orders with recorded VAT.
                - average_tax (Decimal): total_tax / total_orders, 0.00 if none.
                - buckets (list[dict]): ``{'name': label, 'value': Decimal}``
                  in chronological order.

        Raises:
            InvalidReportPeriodError: If ``period`` is not a known bucket size.

        Example:
            >>> TaxReportQueries.vat_report(period='yearly')['buckets']
            [{'name': '2025', 'value': Decimal('1520.00')}]
        """
        trunc = REPORT_PERIODS.get(period)
        if trunc is None:
            raise InvalidReportPeriodError(
                f"Unknown period {period!r}. Valid: {', '.join(REPORT_PERIODS)}"
            )

        orders = TaxReportQueries.taxed_orders(start_date, end_date)

        totals = orders.aggregate(
            total_tax=Coalesce(Sum('tax'), Decimal('0.00')),
            total_orders=Count('id'),
        )
        total_tax = quantize_money(totals['total_tax'])
        total_orders = totals['total_orders']
        average_tax = quantize_money(total_tax / total_orders) if total_orders else Decimal('0.00')

        rows = (
            orders
            .annotate(bucket=trunc('created_at'))
            .values('bucket')
            .annotate(value=Sum('tax'))
            .order_by('bucket')
        )

        return {
            'period': period,
            'start_date': start_date,
            'end_date': end_date,
            'total_tax': total_tax,
            'total_orders': total_orders,
            'average_tax': average_tax,
            'buckets': [
                {'name': bucket_label(row['bucket'], period), 'value': quantize_money(row['value'])}
                for row in rows
            ],
        }


def vat_report_csv(report):
    """Render report buckets as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(['Period', 'VAT Collected (NGN)'])
    for bucket in report['buckets']:
        writer.writerow([bucket['name'], f"{bucket['value']:.2f}"])
    return buffer.getvalue()


def vat_report_filename(period, today=None):
    today = today or date.today()
    return f"vat_report_{period}_{today.isoformat()}.csv"
