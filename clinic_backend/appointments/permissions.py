from clinic_backend.core.models import Role
from clinic_backend.core.permissions import RBACPermission


class AppointmentPermission(RBACPermission):
    """RBAC for Appointment endpoints: nurse and doctor, all methods."""

    read_roles = frozenset({Role.NURSE, Role.DOCTOR})
    write_roles = frozenset({Role.NURSE, Role.DOCTOR})
    message = 'Insufficient permissions'
