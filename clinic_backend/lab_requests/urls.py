"""Lab Requests App URLs.

Prefix: /api/
Routes:
    GET/POST  /api/lab-requests/        - List/Create lab requests
    GET       /api/lab-requests/stats/  - Counters
    PATCH     /api/lab-requests/<pk>/   - Submit result (assigned doctor)
"""

from django.urls import path

from clinic_backend.lab_requests.views import (
    LabRequestListCreateView,
    LabRequestResultView,
    LabRequestStatsView,
)

app_name = 'lab_requests'

urlpatterns = [
    path('lab-requests/', LabRequestListCreateView.as_view(), name='list'),
    path('lab-requests/stats/', LabRequestStatsView.as_view(), name='stats'),
    path('lab-requests/<int:pk>/', LabRequestResultView.as_view(), name='result'),
]
