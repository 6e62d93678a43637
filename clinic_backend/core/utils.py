import logging

from rest_framework.exceptions import ValidationError

from clinic_backend.core.models import Role, User

logger = logging.getLogger(__name__)


DOCTOR_REQUIRED_MESSAGE = 'doctor_id must reference a user with the doctor role'


def log_clinic_action(user, action, patient_id=None, **meta):
    """Write a patient-related action to the clinic log (console only)."""

    role = getattr(user, 'role', None)
    logger.info(
        'clinic_action action=%s user_id=%s role=%s patient_id=%s meta=%s',
        action,
        getattr(user, 'pk', None),
        getattr(role, 'name', None) or '-',
        patient_id,
        meta,
    )


def get_doctor_or_400(doctor_id):
    """Resolve an active user with the doctor role or raise a 400."""
    doctor = (
        User.objects.select_related('role')
        .filter(id=doctor_id, is_active=True, role__name=Role.DOCTOR)
        .first()
    )
    if doctor is None:
        raise ValidationError(DOCTOR_REQUIRED_MESSAGE)
    return doctor


def int_query_param(request, name):
    """Return ``?name=`` as an int, None when absent, 400 when malformed."""
    raw = request.query_params.get(name)
    if raw in (None, ''):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f'{name} must be an integer') from None
