"""
URL patterns for the fuel price map
"""
from django.urls import path

from .views import ForecourtUploadView, HealthCheckView, PriceMapView

app_name = 'price_map'

urlpatterns = [
    path('', PriceMapView.as_view(), name='index'),
    path('api/forecourts/', ForecourtUploadView.as_view(), name='forecourts'),
    path('api/health/', HealthCheckView.as_view(), name='health_check'),
]
