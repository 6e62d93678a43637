from django.conf import settings
from django.db import models


class Appointment(models.Model):
    """One patient visit.

    ``status`` and the two indicator flags are independent: an appointment can
    be referred, lab-requested and diagnosed at the same time.
    """

    STATUS_PENDING = 'pending'
    STATUS_DIAGNOSED = 'diagnosed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'pending'),
        (STATUS_DIAGNOSED, 'diagnosed'),
    ]

    patient = models.ForeignKey(
        'patients.Patient',
        on_delete=models.CASCADE,
        related_name='appointments',
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='assigned_appointments',
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='created_appointments',
    )
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    is_referred = models.BooleanField(default=False)
    is_lab_requested = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Appointment'
        verbose_name_plural = 'Appointments'

    def __str__(self) -> str:
        return f"Appointment {self.id} for patient {self.patient_id} ({self.status})"
