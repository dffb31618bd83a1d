"""
URL configuration for the fuel price map project.
"""
from django.urls import include, path

urlpatterns = [
    path('', include('fuel_map.price_map.urls')),
]
