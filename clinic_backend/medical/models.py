"""Diagnoses (medical descriptions) written for a patient.

A medical description is immutable once created. ``prescriptions`` is stored
as an ordered JSON list of ``{name, dosage, frequency, duration, notes, ndc}``
objects, or null when nothing was prescribed.
"""

from django.conf import settings
from django.db import models


class MedicalDescription(models.Model):
    patient = models.ForeignKey(
        'patients.Patient',
        on_delete=models.CASCADE,
        related_name='medical_descriptions',
    )
    appointment = models.ForeignKey(
        'appointments.Appointment',
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name='medical_descriptions',
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name='medical_descriptions',
    )
    description = models.TextField()
    notes = models.TextField(null=True, blank=True)
    prescriptions = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Medical Description'
        verbose_name_plural = 'Medical Descriptions'

    def __str__(self) -> str:
        return f"Medical description {self.id} for patient {self.patient_id}"
