"""
URL routing for the cannibalization engine.
"""
from django.urls import path

from . import views

urlpatterns = [
    path('analyze/', views.analyze, name='cannibalization-analyze'),
]
