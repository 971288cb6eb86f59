"""
Orders app services layer.

Usage:
    from apps.orders.services import TaxReportQueries, vat_report_csv
"""

from .tax_report import (
    REPORT_PERIODS,
    TaxReportQueries,
    vat_report_csv,
    vat_report_filename,
)

__all__ = [
    'REPORT_PERIODS',
    'TaxReportQueries',
    'vat_report_csv',
    'vat_report_filename',
]
