"""Core permissions for RBAC (Role-Based Access Control).

Every clinic endpoint resolves the caller's stored role (``doctor`` or
``nurse``) and checks it against the roles allowed for the HTTP method.

- No authenticated caller: ``has_permission`` is False and DRF answers 401.
- Authenticated caller without a role, or with a role outside the allowed set:
  403 with ``message``.
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

from clinic_backend.core.models import Role


CLINIC_ROLES = frozenset({Role.NURSE, Role.DOCTOR})


def role_name_of(user):
    role = getattr(user, "role", None)
    return getattr(role, "name", None)


class RBACPermission(BasePermission):
    """Base class for RBAC permissions with read_roles/write_roles pattern.

    Subclasses should define:
    - read_roles: set of role names that can perform GET/HEAD/OPTIONS
    - write_roles: set of role names that can perform POST/PUT/PATCH/DELETE
    - method_roles: optional per-method override, e.g. {"DELETE": {"nurse"}}
    - method_messages: optional per-method denial message

    Example:
        class PatientPermission(RBACPermission):
            read_roles = {"nurse", "doctor"}
            write_roles = {"nurse", "doctor"}
            method_roles = {"POST": {"nurse"}, "DELETE": {"nurse"}}
    """

    read_roles: frozenset = CLINIC_ROLES
    write_roles: frozenset = CLINIC_ROLES
    method_roles: dict = {}
    method_messages: dict = {}
    message = "Insufficient permissions"

    def _role_name(self, request):
        return role_name_of(getattr(request, "user", None))

    def allowed_roles(self, method):
        if method in self.method_roles:
            return self.method_roles[method]
        if method in SAFE_METHODS:
            return self.read_roles
        return self.write_roles

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False

        role_name = self._role_name(request)
        if role_name in self.allowed_roles(request.method):
            return True

        self.message = self.method_messages.get(request.method, type(self).message)
        return False


class IsClinicStaff(RBACPermission):
    """Permission: user must be a nurse or a doctor (all methods)."""

    message = "Forbidden"


class IsDoctor(RBACPermission):
    """Permission: user must have doctor role."""

    read_roles = frozenset({Role.DOCTOR})
    write_roles = frozenset({Role.DOCTOR})
    message = "Only doctors can perform this action"
