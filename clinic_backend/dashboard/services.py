"""Aggregate counters for the landing dashboard. No models of its own."""

from __future__ import annotations

from datetime import timedelta

from django.utils import timezone

from clinic_backend.appointments.models import Appointment
from clinic_backend.lab_requests.models import LabRequest
from clinic_backend.patients.models import Patient


def dashboard_stats(now=None) -> dict:
    now = now or timezone.now()
    start_of_today = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    start_of_tomorrow = start_of_today + timedelta(days=1)

    completed_today = LabRequest.objects.filter(
        status=LabRequest.STATUS_COMPLETED,
        completed_at__gte=start_of_today,
        completed_at__lt=start_of_tomorrow,
    )
    appointments_today = Appointment.objects.filter(
        created_at__gte=start_of_today,
        created_at__lt=start_of_tomorrow,
    )

    return {
        'totalPatients': Patient.objects.count(),
        'pendingLabRequests': LabRequest.objects.filter(status=LabRequest.STATUS_PENDING).count(),
        'totalLabRequests': LabRequest.objects.count(),
        'completedToday': completed_today.count(),
        'appointmentsToday': appointments_today.count(),
        'pendingAppointments': Appointment.objects.filter(status=Appointment.STATUS_PENDING).count(),
    }
