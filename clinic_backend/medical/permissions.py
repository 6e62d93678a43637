from django.conf import settings

from clinic_backend.core.models import Role
from clinic_backend.core.permissions import RBACPermission, role_name_of


def diagnosis_roles():
    """Roles allowed to record a diagnosis."""
    if getattr(settings, 'CLINIC_ALLOW_NURSE_DIAGNOSIS', False):
        return frozenset({Role.DOCTOR, Role.NURSE})
    return frozenset({Role.DOCTOR})


def can_diagnose(user) -> bool:
    return role_name_of(user) in diagnosis_roles()


class MedicalDescriptionPermission(RBACPermission):
    """RBAC for the medical description list/create endpoint.

    - GET: doctor (report listing)
    - POST: doctor, plus nurse when CLINIC_ALLOW_NURSE_DIAGNOSIS is on
    """

    read_roles = frozenset({Role.DOCTOR})
    method_messages = {
        'GET': 'Forbidden',
        'POST': 'Only doctors can create medical descriptions',
    }
    message = 'Forbidden'

    def allowed_roles(self, method):
        if method == 'POST':
            return diagnosis_roles()
        return super().allowed_roles(method)
