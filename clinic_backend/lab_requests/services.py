"""Lab request service functions.

``create_lab_request`` is shared by ``POST /api/lab-requests/`` and the
``lab-request`` step of the appointment workflow.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from django.utils import timezone

from clinic_backend.lab_requests.models import LabRequest

logger = logging.getLogger(__name__)


def create_lab_request(*, appointment, nurse, doctor, test_type: str, reason: str | None = None) -> LabRequest:
    """Create a pending lab request for ``appointment``."""

    lab_request = LabRequest.objects.create(
        appointment=appointment,
        nurse=nurse,
        doctor=doctor,
        test_type=test_type,
        reason=reason or None,
        status=LabRequest.STATUS_PENDING,
        result=None,
    )
    logger.info(
        'lab_request_created id=%s appointment_id=%s nurse_id=%s doctor_id=%s',
        lab_request.id,
        appointment.id,
        getattr(nurse, 'id', None),
        getattr(doctor, 'id', None),
    )
    return lab_request


def submit_result(lab_request: LabRequest, *, result: str) -> LabRequest:
    """Mark ``lab_request`` completed with ``result``.

    Re-submitting on a completed request overwrites the result.
    """

    lab_request.result = result
    lab_request.status = LabRequest.STATUS_COMPLETED
    lab_request.completed_at = timezone.now()
    lab_request.save(update_fields=['result', 'status', 'completed_at', 'updated_at'])
    logger.info('lab_result_submitted id=%s doctor_id=%s', lab_request.id, lab_request.doctor_id)
    return lab_request


def _percent_change(today: int, yesterday: int) -> str:
    if yesterday > 0:
        change = round((today - yesterday) / yesterday * 100)
        return f'+{change}%' if change > 0 else f'{change}%'
    if today > 0:
        return '+100%'
    return '0%'


def lab_request_stats(now=None) -> dict:
    """Counters for the lab request page.

    ``completedToday`` counts results submitted since local midnight;
    ``completedTodayChange`` compares it with the previous day.
    """

    now = now or timezone.now()
    start_of_today = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    start_of_tomorrow = start_of_today + timedelta(days=1)
    start_of_yesterday = start_of_today - timedelta(days=1)

    completed_qs = LabRequest.objects.filter(status=LabRequest.STATUS_COMPLETED)

    total = LabRequest.objects.count()
    completed = completed_qs.count()
    pending = LabRequest.objects.filter(status=LabRequest.STATUS_PENDING).count()
    completed_today = completed_qs.filter(
        completed_at__gte=start_of_today,
        completed_at__lt=start_of_tomorrow,
    ).count()
    completed_yesterday = completed_qs.filter(
        completed_at__gte=start_of_yesterday,
        completed_at__lt=start_of_today,
    ).count()

    return {
        'totalRequests': total,
        'completed': completed,
        'pending': pending,
        'completedToday': completed_today,
        'completionRate': round(completed / total * 100) if total else 0,
        'completedTodayChange': _percent_change(completed_today, completed_yesterday),
    }
