from __future__ import annotations

import logging

from clinic_backend.appointments.models import Appointment

logger = logging.getLogger(__name__)


UPDATABLE_FIELDS = ('status', 'is_referred', 'is_lab_requested')


def create_appointment(*, patient, created_by=None, doctor=None) -> Appointment:
    """Create a pending appointment with both indicator flags off."""

    appointment = Appointment.objects.create(
        patient=patient,
        doctor=doctor,
        created_by=created_by,
        status=Appointment.STATUS_PENDING,
        is_referred=False,
        is_lab_requested=False,
    )
    logger.info(
        'appointment_created id=%s patient_id=%s doctor_id=%s',
        appointment.id,
        patient.id,
        getattr(doctor, 'id', None),
    )
    return appointment


def update_appointment(appointment: Appointment, **changes) -> Appointment:
    """Write only the given fields (``status``, ``is_referred``, ``is_lab_requested``)."""

    fields = [name for name in UPDATABLE_FIELDS if name in changes]
    if not fields:
        return appointment

    for name in fields:
        setattr(appointment, name, changes[name])
    appointment.save(update_fields=[*fields, 'updated_at'])
    logger.info('appointment_updated id=%s fields=%s', appointment.id, ','.join(fields))
    return appointment
