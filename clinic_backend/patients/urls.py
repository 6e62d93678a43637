"""Patients App URLs.

Prefix: /api/
Routes:
    GET/POST          /api/patients/       - List/Register patients
    GET/PATCH/DELETE  /api/patients/<pk>/  - Retrieve/Replace/Delete patient
"""

from django.urls import path

from clinic_backend.patients.views import (
    PatientDetailView,
    PatientListCreateView,
)

app_name = 'patients'

urlpatterns = [
    path('patients/', PatientListCreateView.as_view(), name='list'),
    path('patients/<int:pk>/', PatientDetailView.as_view(), name='detail'),
]
