"""
Appointments Services Module.

This package contains service-layer logic for the appointments app:
- appointments: Create/update appointments
- workflow: Continue an appointment (lab request, referral, diagnosis)
"""

from clinic_backend.appointments.services.appointments import (
    create_appointment,
    update_appointment,
)
from clinic_backend.appointments.services.workflow import (
    authorize_action,
    continue_appointment,
)

__all__ = [
    "create_appointment",
    "update_appointment",
    "authorize_action",
    "continue_appointment",
]
