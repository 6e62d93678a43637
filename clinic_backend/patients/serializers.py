from rest_framework import serializers

from clinic_backend.patients.models import Patient


GENDER_ERROR = 'Invalid gender. Must be male, female, or other'


class PatientReadSerializer(serializers.ModelSerializer):
    """Read-only serializer with all fields."""

    class Meta:
        model = Patient
        fields = [
            'id',
            'full_name',
            'age',
            'gender',
            'address',
            'contact',
            'registered_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PatientBriefSerializer(serializers.ModelSerializer):
    """Patient embedded in appointments, lab requests and diagnoses."""

    class Meta:
        model = Patient
        fields = ['id', 'full_name', 'age', 'gender', 'contact']
        read_only_fields = fields


class PatientWriteSerializer(serializers.ModelSerializer):
    """Write serializer for register/edit.

    Edits are full-record replaces: ``full_name``, ``age`` and ``gender`` are
    required on every write, omitted optional fields are cleared.
    """

    gender = serializers.ChoiceField(
        choices=Patient.GENDER_CHOICES,
        error_messages={'invalid_choice': GENDER_ERROR},
    )
    age = serializers.IntegerField(min_value=0, max_value=150)
    address = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    contact = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None, max_length=64)

    class Meta:
        model = Patient
        fields = [
            'full_name',
            'age',
            'gender',
            'address',
            'contact',
        ]

    def validate_full_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('full_name must not be blank.')
        return value

    def validate(self, attrs):
        for key in ('address', 'contact'):
            if not attrs.get(key):
                attrs[key] = None
        return attrs
