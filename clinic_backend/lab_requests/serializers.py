from rest_framework import serializers

from clinic_backend.core.serializers import UserBriefSerializer
from clinic_backend.lab_requests.models import LabRequest
from clinic_backend.patients.serializers import PatientBriefSerializer


class LabRequestReadSerializer(serializers.ModelSerializer):
    """Lab request with the patient (through the appointment), nurse and doctor embedded."""

    patient_id = serializers.IntegerField(source='appointment.patient_id', read_only=True)
    patient = PatientBriefSerializer(source='appointment.patient', read_only=True)
    nurse = UserBriefSerializer(read_only=True, allow_null=True)
    doctor = UserBriefSerializer(read_only=True, allow_null=True)

    class Meta:
        model = LabRequest
        fields = [
            'id',
            'appointment_id',
            'patient_id',
            'patient',
            'nurse_id',
            'nurse',
            'doctor_id',
            'doctor',
            'test_type',
            'reason',
            'status',
            'result',
            'created_at',
            'updated_at',
            'completed_at',
        ]
        read_only_fields = fields


class LabRequestCreateSerializer(serializers.Serializer):
    appointment_id = serializers.IntegerField(min_value=1)
    doctor_id = serializers.IntegerField(min_value=1)
    test_type = serializers.CharField(max_length=255)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class LabResultSerializer(serializers.Serializer):
    """Result submission; the only accepted transition is to ``completed``."""

    result = serializers.CharField()
    status = serializers.CharField()

    def validate_status(self, value):
        if value != LabRequest.STATUS_COMPLETED:
            raise serializers.ValidationError('Status must be completed')
        return value
