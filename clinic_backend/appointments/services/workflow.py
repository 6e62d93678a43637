"""
Appointment workflow ("continue appointment").

Each action is a fixed sequence of steps:

    lab-request   update_appointment -> create_lab_request
    refer-doctor  update_appointment -> create_referral_appointment
    diagnose      create_medical_description -> update_appointment

Everything that can be checked up front (caller role, payload, referenced
doctor) is checked before the first write. The steps themselves run as
separate writes without an enclosing transaction: if a step fails, the steps
before it stay committed and ``WorkflowStepError`` reports which ones did.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from django.db import DatabaseError
from rest_framework.exceptions import PermissionDenied

from clinic_backend.appointments.models import Appointment
from clinic_backend.appointments.serializers import (
    ACTION_DIAGNOSE,
    ACTION_LAB_REQUEST,
    ACTION_REFER_DOCTOR,
)
from clinic_backend.appointments.services.appointments import create_appointment, update_appointment
from clinic_backend.core.exceptions import WorkflowStepError
from clinic_backend.core.models import Role
from clinic_backend.core.permissions import role_name_of
from clinic_backend.core.utils import get_doctor_or_400
from clinic_backend.lab_requests.services import create_lab_request
from clinic_backend.medical.permissions import can_diagnose
from clinic_backend.medical.services import record_medical_description

logger = logging.getLogger(__name__)


Step = tuple[str, Callable[[], Any]]


def authorize_action(action: str, user) -> None:
    """Raise PermissionDenied when ``user`` may not run ``action``."""

    role = role_name_of(user)
    if action == ACTION_LAB_REQUEST and role != Role.NURSE:
        raise PermissionDenied('Only nurses can create lab requests')
    if action == ACTION_REFER_DOCTOR and role not in (Role.NURSE, Role.DOCTOR):
        raise PermissionDenied('Only nurses and doctors can refer patients')
    if action == ACTION_DIAGNOSE and not can_diagnose(user):
        raise PermissionDenied('Only doctors can create medical descriptions')


def _lab_request_steps(appointment: Appointment, data: dict, user) -> list[Step]:
    doctor = get_doctor_or_400(data['doctor_id'])
    return [
        (
            'update_appointment',
            lambda: update_appointment(appointment, is_referred=False, is_lab_requested=True),
        ),
        (
            'create_lab_request',
            lambda: create_lab_request(
                appointment=appointment,
                nurse=user,
                doctor=doctor,
                test_type=data['test_type'],
                reason=data.get('reason'),
            ),
        ),
    ]


def _refer_doctor_steps(appointment: Appointment, data: dict, user) -> list[Step]:
    doctor = get_doctor_or_400(data['doctor_id'])
    return [
        (
            'update_appointment',
            lambda: update_appointment(appointment, is_referred=True, is_lab_requested=False),
        ),
        (
            'create_referral_appointment',
            lambda: create_appointment(patient=appointment.patient, created_by=user, doctor=doctor),
        ),
    ]


def _diagnose_steps(appointment: Appointment, data: dict, user) -> list[Step]:
    return [
        (
            'create_medical_description',
            lambda: record_medical_description(
                patient=appointment.patient,
                appointment=appointment,
                doctor=user,
                description=data['description'],
                notes=data.get('notes'),
                prescriptions=data.get('prescriptions'),
            ),
        ),
        (
            'update_appointment',
            lambda: update_appointment(appointment, status=Appointment.STATUS_DIAGNOSED),
        ),
    ]


_STEP_BUILDERS = {
    ACTION_LAB_REQUEST: _lab_request_steps,
    ACTION_REFER_DOCTOR: _refer_doctor_steps,
    ACTION_DIAGNOSE: _diagnose_steps,
}


def _run_steps(action: str, appointment: Appointment, steps: list[Step]) -> dict[str, Any]:
    results: dict[str, Any] = {}
    completed: list[str] = []

    for name, step in steps:
        try:
            results[name] = step()
        except DatabaseError as exc:
            logger.error(
                'workflow_step_failed action=%s appointment_id=%s step=%s completed=%s error=%s',
                action,
                appointment.id,
                name,
                completed,
                exc,
            )
            raise WorkflowStepError(
                action=action,
                failed_step=name,
                completed_steps=completed,
                message=f"Failed to {action.replace('-', ' ')}: step '{name}' did not complete",
            ) from exc
        completed.append(name)

    return results


def continue_appointment(*, appointment: Appointment, action: str, data: dict, user) -> dict[str, Any]:
    """
    Run ``action`` on ``appointment`` on behalf of ``user``.

    Args:
        appointment: The appointment being continued
        action: 'lab-request', 'refer-doctor' or 'diagnose'
        data: Validated payload (ContinueAppointmentSerializer)
        user: The calling nurse or doctor

    Returns:
        Step name -> step result (model instances)

    Raises:
        PermissionDenied: The caller's role may not run ``action``
        ValidationError: ``doctor_id`` does not reference a doctor
        WorkflowStepError: A step failed after validation
    """

    authorize_action(action, user)
    steps = _STEP_BUILDERS[action](appointment, data, user)
    results = _run_steps(action, appointment, steps)

    logger.info(
        'workflow_completed action=%s appointment_id=%s user_id=%s',
        action,
        appointment.id,
        user.id,
    )
    return results
