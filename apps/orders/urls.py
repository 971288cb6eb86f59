from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    path('vat-report/', views.vat_report, name='vat-report'),
    path('vat-report/export/', views.vat_report_export, name='vat-report-export'),
]
