"""Appointments App URLs.

Prefix: /api/
Routes:
    GET/POST        /api/appointments/                - List/Create appointments
    GET/PUT/DELETE  /api/appointments/<pk>/           - Retrieve/Update/Delete appointment
    POST            /api/appointments/<pk>/continue/  - Lab request, referral or diagnosis
"""

from django.urls import path

from clinic_backend.appointments.views import (
    AppointmentContinueView,
    AppointmentDetailView,
    AppointmentListCreateView,
)

app_name = 'appointments'

urlpatterns = [
    path('appointments/', AppointmentListCreateView.as_view(), name='list'),
    path('appointments/<int:pk>/', AppointmentDetailView.as_view(), name='detail'),
    path('appointments/<int:pk>/continue/', AppointmentContinueView.as_view(), name='continue'),
]
