from clinic_backend.core.models import Role
from clinic_backend.core.permissions import RBACPermission


class PatientPermission(RBACPermission):
    """RBAC for Patient endpoints.

    - nurse: read, register, edit, delete
    - doctor: read, edit
    """

    read_roles = frozenset({Role.NURSE, Role.DOCTOR})
    write_roles = frozenset({Role.NURSE, Role.DOCTOR})
    method_roles = {
        'POST': frozenset({Role.NURSE}),
        'DELETE': frozenset({Role.NURSE}),
    }
    method_messages = {
        'POST': 'Only nurses can register patients',
        'PATCH': 'Only nurses and doctors can edit patients',
        'PUT': 'Only nurses and doctors can edit patients',
        'DELETE': 'Only nurses can delete patients',
    }
    message = 'Forbidden'
