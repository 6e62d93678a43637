from clinic_backend.core.models import Role
from clinic_backend.core.permissions import RBACPermission


class LabRequestPermission(RBACPermission):
    """RBAC for Lab Request endpoints.

    - nurse: read, create
    - doctor: read, submit result (PATCH; assignment is checked in the view)
    """

    read_roles = frozenset({Role.NURSE, Role.DOCTOR})
    method_roles = {
        'POST': frozenset({Role.NURSE}),
        'PATCH': frozenset({Role.DOCTOR}),
    }
    method_messages = {
        'POST': 'Only nurses can create lab requests',
        'PATCH': 'Only doctors can submit test results',
    }
    message = 'Forbidden'
