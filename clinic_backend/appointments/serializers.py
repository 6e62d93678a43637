from rest_framework import serializers

from clinic_backend.appointments.models import Appointment
from clinic_backend.core.serializers import UserBriefSerializer
from clinic_backend.medical.serializers import PrescriptionSerializer


STATUS_ERROR = 'Invalid status'

ACTION_LAB_REQUEST = 'lab-request'
ACTION_REFER_DOCTOR = 'refer-doctor'
ACTION_DIAGNOSE = 'diagnose'

WORKFLOW_ACTIONS = (ACTION_LAB_REQUEST, ACTION_REFER_DOCTOR, ACTION_DIAGNOSE)

# payload fields each workflow action needs
ACTION_REQUIRED_FIELDS = {
    ACTION_LAB_REQUEST: ('test_type', 'doctor_id'),
    ACTION_REFER_DOCTOR: ('doctor_id',),
    ACTION_DIAGNOSE: ('description',),
}


class AppointmentReadSerializer(serializers.ModelSerializer):
    """Appointment with the patient's name, age and gender flattened in."""

    patient_name = serializers.CharField(source='patient.full_name', read_only=True)
    patient_age = serializers.IntegerField(source='patient.age', read_only=True)
    patient_gender = serializers.CharField(source='patient.gender', read_only=True)
    doctor = UserBriefSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Appointment
        fields = [
            'id',
            'patient_id',
            'patient_name',
            'patient_age',
            'patient_gender',
            'doctor',
            'created_by',
            'status',
            'is_referred',
            'is_lab_requested',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class AppointmentCreateSerializer(serializers.Serializer):
    """New appointments always start pending with both flags off."""

    patient_id = serializers.IntegerField(min_value=1)
    doctor_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AppointmentUpdateSerializer(serializers.Serializer):
    """Partial update: only the keys present in the payload are written."""

    status = serializers.ChoiceField(
        choices=Appointment.STATUS_CHOICES,
        required=False,
        error_messages={'invalid_choice': STATUS_ERROR},
    )
    is_referred = serializers.BooleanField(required=False)
    is_lab_requested = serializers.BooleanField(required=False)


class ContinueAppointmentSerializer(serializers.Serializer):
    """Payload of ``POST /api/appointments/<id>/continue/``.

    ``action`` selects the workflow; the other fields are required depending
    on it (see ``ACTION_REQUIRED_FIELDS``).
    """

    action = serializers.ChoiceField(
        choices=WORKFLOW_ACTIONS,
        error_messages={
            'invalid_choice': 'Invalid action. Must be lab-request, refer-doctor, or diagnose',
        },
    )

    # lab-request / refer-doctor
    doctor_id = serializers.IntegerField(required=False, min_value=1)
    test_type = serializers.CharField(required=False, max_length=255)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    # diagnose
    description = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    prescriptions = PrescriptionSerializer(many=True, required=False, allow_null=True)

    def validate(self, attrs):
        missing = [
            field
            for field in ACTION_REQUIRED_FIELDS[attrs['action']]
            if attrs.get(field) in (None, '')
        ]
        if missing:
            raise serializers.ValidationError(
                {field: 'This field is required.' for field in missing},
                code='required',
            )
        return attrs
