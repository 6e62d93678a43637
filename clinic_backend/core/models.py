from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.Model):
    """User roles for RBAC (Role-Based Access Control).

    Clinic roles: doctor, nurse (seeded by migration).
    """

    DOCTOR = 'doctor'
    NURSE = 'nurse'
    NAMES = (DOCTOR, NURSE)

    name = models.CharField(max_length=64, unique=True, db_index=True)
    label = models.CharField(max_length=128)

    class Meta:
        db_table = 'core_role'
        ordering = ['name']
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'

    def __str__(self) -> str:
        return self.label


class User(AbstractUser):
    """Custom User model with role-based access control.

    Extends Django's AbstractUser with:
    - role: ForeignKey to Role for RBAC (fixed at signup)
    - email: made unique, used as the login identifier
    """

    email = models.EmailField('email address', unique=True)
    role = models.ForeignKey(
        Role,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name='users',
    )

    class Meta:
        db_table = 'core_user'
        ordering = ['first_name', 'last_name', 'id']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    @property
    def role_name(self):
        return getattr(self.role, 'name', None)
