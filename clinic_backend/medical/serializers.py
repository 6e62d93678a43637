from rest_framework import serializers

from clinic_backend.core.serializers import UserBriefSerializer
from clinic_backend.medical.models import MedicalDescription
from clinic_backend.patients.models import Patient


class PrescriptionSerializer(serializers.Serializer):
    """One prescribed drug. Only ``name`` is required; drug identity is not checked."""

    name = serializers.CharField(max_length=255)
    dosage = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    frequency = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    duration = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    ndc = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class _PatientContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = ['id', 'full_name', 'contact']
        read_only_fields = fields


class MedicalDescriptionReadSerializer(serializers.ModelSerializer):
    patient = _PatientContactSerializer(read_only=True)
    doctor = UserBriefSerializer(read_only=True, allow_null=True)

    class Meta:
        model = MedicalDescription
        fields = [
            'id',
            'patient_id',
            'patient',
            'appointment_id',
            'doctor_id',
            'doctor',
            'description',
            'notes',
            'prescriptions',
            'created_at',
        ]
        read_only_fields = fields


class MedicalDescriptionCreateSerializer(serializers.Serializer):
    """Payload for ``POST /api/medical-descriptions/``.

    Either ``patient_id`` or ``appointment_id`` must be given; with only an
    appointment the patient is taken from it.
    """

    patient_id = serializers.IntegerField(required=False, min_value=1)
    appointment_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    description = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    prescriptions = PrescriptionSerializer(many=True, required=False, allow_null=True)

    def validate(self, attrs):
        if not attrs.get('patient_id') and not attrs.get('appointment_id'):
            raise serializers.ValidationError(
                {'patient_id': 'This field is required.'},
                code='required',
            )
        return attrs
