"""
URL configuration for seo_dashboard project.
"""
from django.urls import path, include

urlpatterns = [
    path('api/v1/cannibalization/', include('seo.cannibalization.urls')),
]
