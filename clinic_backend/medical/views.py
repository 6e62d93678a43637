"""Medical description views.

- MedicalDescriptionListCreateView: doctor report listing / record a diagnosis
- MedicalDescriptionStatsView: counters for the diagnostics page
- PatientMedicalHistoryView: all diagnoses of one patient (nurse or doctor)
"""

from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from clinic_backend.appointments.models import Appointment
from clinic_backend.core.permissions import IsClinicStaff, IsDoctor
from clinic_backend.core.utils import int_query_param, log_clinic_action
from clinic_backend.medical.models import MedicalDescription
from clinic_backend.medical.permissions import MedicalDescriptionPermission
from clinic_backend.medical.serializers import (
    MedicalDescriptionCreateSerializer,
    MedicalDescriptionReadSerializer,
)
from clinic_backend.medical.services import medical_description_stats, record_medical_description
from clinic_backend.patients.models import Patient


def _medical_descriptions():
    return MedicalDescription.objects.select_related('patient', 'doctor')


class MedicalDescriptionListCreateView(generics.ListCreateAPIView):
    """GET /api/medical-descriptions/[?patient_id=]  POST /api/medical-descriptions/"""

    permission_classes = [MedicalDescriptionPermission]

    def get_queryset(self):
        qs = _medical_descriptions()
        patient_id = int_query_param(self.request, 'patient_id')
        if patient_id is not None:
            qs = qs.filter(patient_id=patient_id)
        return qs

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return MedicalDescriptionCreateSerializer
        return MedicalDescriptionReadSerializer

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'medicalDescriptions': serializer.data}, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        data = write_serializer.validated_data

        appointment = None
        if data.get('appointment_id'):
            appointment = Appointment.objects.select_related('patient').filter(id=data['appointment_id']).first()
            if appointment is None:
                raise NotFound('Appointment not found')

        if data.get('patient_id'):
            patient = Patient.objects.filter(id=data['patient_id']).first()
            if patient is None:
                raise NotFound('Patient not found')
            if appointment is not None and appointment.patient_id != patient.id:
                raise ValidationError('Appointment does not belong to this patient')
        else:
            patient = appointment.patient

        medical_description = record_medical_description(
            patient=patient,
            appointment=appointment,
            doctor=request.user,
            description=data['description'],
            notes=data.get('notes'),
            prescriptions=data.get('prescriptions'),
        )
        log_clinic_action(
            request.user,
            'medical_description_created',
            patient_id=patient.id,
            medical_description_id=medical_description.id,
        )

        return Response(
            {
                'message': 'Medical description created successfully',
                'medicalDescription': MedicalDescriptionReadSerializer(medical_description).data,
            },
            status=status.HTTP_201_CREATED,
        )


class MedicalDescriptionStatsView(APIView):
    """GET /api/medical-descriptions/stats/ -> {"stats": {"totalRecords", "thisWeek"}}"""

    permission_classes = [IsDoctor]

    def get(self, request, *args, **kwargs):
        return Response({'stats': medical_description_stats()}, status=status.HTTP_200_OK)


class PatientMedicalHistoryView(generics.ListAPIView):
    """GET /api/patients/<pk>/medical-descriptions/ (newest first)."""

    permission_classes = [IsClinicStaff]
    serializer_class = MedicalDescriptionReadSerializer

    def list(self, request, *args, **kwargs):
        patient = Patient.objects.filter(id=kwargs['pk']).first()
        if patient is None:
            raise NotFound('Patient not found')

        log_clinic_action(request.user, 'patient_history_view', patient_id=patient.id)
        qs = _medical_descriptions().filter(patient=patient)
        serializer = self.get_serializer(qs, many=True)
        return Response({'medicalDescriptions': serializer.data}, status=status.HTTP_200_OK)
