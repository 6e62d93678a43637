"""Medical description service functions.

Used by the medical description endpoint and by the ``diagnose`` step of the
appointment workflow.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from django.utils import timezone

from clinic_backend.medical.models import MedicalDescription

if TYPE_CHECKING:
    from clinic_backend.appointments.models import Appointment
    from clinic_backend.patients.models import Patient

logger = logging.getLogger(__name__)


def normalize_prescriptions(prescriptions: list | None) -> list[dict] | None:
    """Plain dicts in the submitted order; an empty list becomes None."""
    if not prescriptions:
        return None
    return [dict(item) for item in prescriptions]


def record_medical_description(
    *,
    patient: 'Patient',
    doctor,
    description: str,
    notes: str | None = None,
    prescriptions: list | None = None,
    appointment: 'Appointment | None' = None,
) -> MedicalDescription:
    """Create a medical description authored by ``doctor``."""

    medical_description = MedicalDescription.objects.create(
        patient=patient,
        appointment=appointment,
        doctor=doctor,
        description=description,
        notes=notes or None,
        prescriptions=normalize_prescriptions(prescriptions),
    )
    logger.info(
        'medical_description_created id=%s patient_id=%s appointment_id=%s doctor_id=%s',
        medical_description.id,
        patient.id,
        getattr(appointment, 'id', None),
        getattr(doctor, 'id', None),
    )
    return medical_description


def medical_description_stats(now=None) -> dict:
    """Total count and the count created in the last seven days."""

    now = now or timezone.now()
    start_of_today = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = start_of_today - timedelta(days=7)

    return {
        'totalRecords': MedicalDescription.objects.count(),
        'thisWeek': MedicalDescription.objects.filter(created_at__gte=week_ago).count(),
    }
