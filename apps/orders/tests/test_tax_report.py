import pytest
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.orders.exceptions import InvalidReportPeriodError
from apps.orders.services import TaxReportQueries, vat_report_csv, vat_report_filename


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


# =============================================================================
# Query Tests
# =============================================================================

@pytest.mark.django_db
class TestVatReport:
    """Tests for TaxReportQueries.vat_report"""

    def test_daily_totals(self, report_orders):
        report = TaxReportQueries.vat_report(
            start_date=date(2025, 1, 1),
            end_date=date(2025, 2, 28),
            period='daily',
        )

        assert report['total_tax'] == Decimal('300.00')
        assert report['total_orders'] == 4
        assert report['average_tax'] == Decimal('75.00')
        assert report['buckets'] == [
            {'name': '2025-01-06', 'value': Decimal('100.00')},
            {'name': '2025-01-20', 'value': Decimal('50.00')},
            {'name': '2025-02-03', 'value': Decimal('150.00')},
        ]

    def test_weekly_buckets(self, report_orders):
        report = TaxReportQueries.vat_report(start_date=date(2025, 1, 1), period='weekly')

        assert [b['name'] for b in report['buckets']] == ['2025-W02', '2025-W04', '2025-W06']

    def test_monthly_buckets(self, report_orders):
        report = TaxReportQueries.vat_report(start_date=date(2025, 1, 1), period='monthly')

        assert report['buckets'] == [
            {'name': '2025-01', 'value': Decimal('150.00')},
            {'name': '2025-02', 'value': Decimal('150.00')},
        ]

    def test_yearly_without_range(self, report_orders):
        report = TaxReportQueries.vat_report(period='yearly')

        assert report['buckets'] == [
            {'name': '2024', 'value': Decimal('999.00')},
            {'name': '2025', 'value': Decimal('300.00')},
        ]
        assert report['total_orders'] == 5

    def test_untaxed_orders_excluded(self, make_order):
        make_order(utc(2025, 3, 1, 12), tax=None)

        report = TaxReportQueries.vat_report(start_date=date(2025, 3, 1))

        assert report['total_tax'] == Decimal('0.00')
        assert report['total_orders'] == 0
        assert report['average_tax'] == Decimal('0.00')
        assert report['buckets'] == []

    def test_end_date_inclusive(self, report_orders):
        report = TaxReportQueries.vat_report(
            start_date=date(2025, 1, 20),
            end_date=date(2025, 1, 20),
        )

        assert report['total_tax'] == Decimal('50.00')

    def test_unknown_period(self):
        with pytest.raises(InvalidReportPeriodError):
            TaxReportQueries.vat_report(period='hourly')


class TestVatReportCsv:
    """Tests for vat_report_csv"""

    def test_renders_buckets(self):
        report = {'buckets': [
            {'name': '2025-01', 'value': Decimal('150')},
            {'name': '2025-02', 'value': Decimal('12.5')},
        ]}

        assert vat_report_csv(report).splitlines() == [
            'Period,VAT Collected (NGN)',
            '2025-01,150.00',
            '2025-02,12.50',
        ]

    def test_filename(self):
        assert vat_report_filename('monthly', today=date(2025, 3, 4)) == 'vat_report_monthly_2025-03-04.csv'


# =============================================================================
# Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestVatReportEndpoint:
    """Tests for GET /api/orders/vat-report/"""

    def test_staff_gets_report(self, staff_client, report_orders):
        response = staff_client.get(reverse('orders:vat-report'), {
            'start_date': '2025-01-01',
            'end_date': '2025-02-28',
            'period': 'monthly',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_tax'] == '300.00'
        assert response.data['total_orders'] == 4
        assert response.data['average_tax'] == '75.00'
        assert response.data['period'] == 'monthly'
        assert [dict(b) for b in response.data['buckets']] == [
            {'name': '2025-01', 'value': '150.00'},
            {'name': '2025-02', 'value': '150.00'},
        ]

    def test_defaults_to_last_30_days(self, staff_client, report_orders):
        response = staff_client.get(reverse('orders:vat-report'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['period'] == 'daily'
        assert response.data['start_date'] is not None

    def test_non_staff_forbidden(self, customer_client):
        response = customer_client.get(reverse('orders:vat-report'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_unauthorized(self, api_client):
        response = api_client.get(reverse('orders:vat-report'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_period(self, staff_client):
        response = staff_client.get(reverse('orders:vat-report'), {'period': 'hourly'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_end_before_start(self, staff_client):
        response = staff_client.get(reverse('orders:vat-report'), {
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestVatReportExport:
    """Tests for GET /api/orders/vat-report/export/"""

    def test_csv_download(self, staff_client, report_orders):
        response = staff_client.get(reverse('orders:vat-report-export'), {
            'start_date': '2025-01-01',
            'period': 'monthly',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert 'attachment; filename="vat_report_monthly_' in response['Content-Disposition']
        assert response.content.decode().splitlines() == [
            'Period,VAT Collected (NGN)',
            '2025-01,150.00',
            '2025-02,150.00',
        ]

    def test_non_staff_forbidden(self, customer_client):
        response = customer_client.get(reverse('orders:vat-report-export'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
