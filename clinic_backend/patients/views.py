from rest_framework import generics, status
from rest_framework.response import Response

from clinic_backend.core.utils import log_clinic_action
from clinic_backend.patients.models import Patient
from clinic_backend.patients.permissions import PatientPermission
from clinic_backend.patients.serializers import PatientReadSerializer, PatientWriteSerializer


class PatientListCreateView(generics.ListCreateAPIView):
    """List all patients (newest first) or register a new patient."""

    permission_classes = [PatientPermission]

    def get_queryset(self):
        return Patient.objects.all()

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return PatientWriteSerializer
        return PatientReadSerializer

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'patients': serializer.data}, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        patient = write_serializer.save(registered_by=request.user)
        log_clinic_action(request.user, 'patient_created', patient_id=patient.id)

        return Response(
            {
                'message': 'Patient registered successfully',
                'patient': PatientReadSerializer(patient).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PatientDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, replace (PATCH) or delete a patient."""

    permission_classes = [PatientPermission]
    http_method_names = ['get', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return Patient.objects.all()

    def retrieve(self, request, *args, **kwargs):
        patient = self.get_object()
        log_clinic_action(request.user, 'patient_view', patient_id=patient.id)
        return Response({'patient': PatientReadSerializer(patient).data}, status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        patient = self.get_object()

        # full-record replace even on PATCH
        write_serializer = PatientWriteSerializer(patient, data=request.data)
        write_serializer.is_valid(raise_exception=True)
        updated = write_serializer.save()
        log_clinic_action(request.user, 'patient_updated', patient_id=updated.id)

        return Response(
            {
                'message': 'Patient updated successfully',
                'patient': PatientReadSerializer(updated).data,
            },
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, *args, **kwargs):
        patient = self.get_object()
        patient_id = patient.id
        patient.delete()
        log_clinic_action(request.user, 'patient_deleted', patient_id=patient_id)
        return Response({'message': 'Patient deleted successfully'}, status=status.HTTP_200_OK)
