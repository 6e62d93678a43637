"""Medical App URLs.

Prefix: /api/
Routes:
    GET/POST  /api/medical-descriptions/                 - Doctor report listing / record diagnosis
    GET       /api/medical-descriptions/stats/           - Counters
    GET       /api/patients/<pk>/medical-descriptions/   - Patient history
"""

from django.urls import path

from clinic_backend.medical.views import (
    MedicalDescriptionListCreateView,
    MedicalDescriptionStatsView,
    PatientMedicalHistoryView,
)

app_name = 'medical'

urlpatterns = [
    path('medical-descriptions/', MedicalDescriptionListCreateView.as_view(), name='list'),
    path('medical-descriptions/stats/', MedicalDescriptionStatsView.as_view(), name='stats'),
    path('patients/<int:pk>/medical-descriptions/', PatientMedicalHistoryView.as_view(), name='patient-history'),
]
