"""Dashboard App URLs.

Prefix: /api/dashboard/
Routes:
    GET /api/dashboard/stats/ - Aggregate counters
"""

from django.urls import path

from clinic_backend.dashboard.views import DashboardStatsView

app_name = 'dashboard'

urlpatterns = [
    path('stats/', DashboardStatsView.as_view(), name='stats'),
]
