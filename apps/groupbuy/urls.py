from django.urls import path

from apps.checkout.views import ProcessInfluencerComplianceView
from . import views

app_name = 'groupbuy'

urlpatterns = [
    path(
        'process-payment-deadlines/',
        views.ProcessPaymentDeadlinesView.as_view(),
        name='process-payment-deadlines',
    ),
    path(
        'process-influencer-compliance/',
        ProcessInfluencerComplianceView.as_view(),
        name='process-influencer-compliance',
    ),
]
