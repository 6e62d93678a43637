from django.conf import settings
from django.db import models


class LabRequest(models.Model):
    """A diagnostic test ordered by a nurse and assigned to a doctor.

    Lifecycle: ``pending`` -> ``completed`` (terminal). The patient is reached
    through the appointment.
    """

    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'pending'),
        (STATUS_COMPLETED, 'completed'),
    ]

    appointment = models.ForeignKey(
        'appointments.Appointment',
        on_delete=models.CASCADE,
        related_name='lab_requests',
    )
    nurse = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name='requested_lab_requests',
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name='assigned_lab_requests',
    )
    test_type = models.CharField(max_length=255)
    reason = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    result = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Lab Request'
        verbose_name_plural = 'Lab Requests'

    def __str__(self) -> str:
        return f"{self.test_type} (appointment {self.appointment_id}, {self.status})"
