from django.urls import path
from . import views

app_name = 'checkout'

urlpatterns = [
    path('policy/', views.checkout_policy, name='policy'),
    path('quote/', views.checkout_quote, name='quote'),
    path('vat/', views.vat_calculator, name='vat'),
]
