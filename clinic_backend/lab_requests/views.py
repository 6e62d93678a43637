"""Lab request views.

- LabRequestListCreateView: list (``?patient_id=``, ``?status=``) / nurse creates
- LabRequestResultView: assigned doctor submits the result
- LabRequestStatsView: counters
"""

from rest_framework import generics, status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from clinic_backend.appointments.models import Appointment
from clinic_backend.core.permissions import IsClinicStaff
from clinic_backend.core.utils import get_doctor_or_400, int_query_param, log_clinic_action
from clinic_backend.lab_requests.models import LabRequest
from clinic_backend.lab_requests.permissions import LabRequestPermission
from clinic_backend.lab_requests.serializers import (
    LabRequestCreateSerializer,
    LabRequestReadSerializer,
    LabResultSerializer,
)
from clinic_backend.lab_requests.services import create_lab_request, lab_request_stats, submit_result


def _lab_requests():
    return LabRequest.objects.select_related('appointment__patient', 'nurse', 'doctor')


class LabRequestListCreateView(generics.ListCreateAPIView):
    """GET /api/lab-requests/[?patient_id=&status=]  POST /api/lab-requests/"""

    permission_classes = [LabRequestPermission]

    def get_queryset(self):
        qs = _lab_requests()

        patient_id = int_query_param(self.request, 'patient_id')
        if patient_id is not None:
            qs = qs.filter(appointment__patient_id=patient_id)

        status_param = self.request.query_params.get('status')
        if status_param:
            if status_param not in dict(LabRequest.STATUS_CHOICES):
                raise ValidationError('Invalid status. Must be pending or completed')
            qs = qs.filter(status=status_param)
        return qs

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return LabRequestCreateSerializer
        return LabRequestReadSerializer

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'labRequests': serializer.data}, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        data = write_serializer.validated_data

        appointment = Appointment.objects.select_related('patient').filter(id=data['appointment_id']).first()
        if appointment is None:
            raise NotFound('Appointment not found')
        doctor = get_doctor_or_400(data['doctor_id'])

        lab_request = create_lab_request(
            appointment=appointment,
            nurse=request.user,
            doctor=doctor,
            test_type=data['test_type'],
            reason=data.get('reason'),
        )
        log_clinic_action(
            request.user,
            'lab_request_created',
            patient_id=appointment.patient_id,
            lab_request_id=lab_request.id,
        )

        return Response(
            {
                'message': 'Lab request created successfully',
                'labRequest': LabRequestReadSerializer(lab_request).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LabRequestResultView(APIView):
    """PATCH /api/lab-requests/<pk>/  Body: {"result": "...", "status": "completed"}

    Checks in order: doctor role (403), request exists (404), caller is the
    assigned doctor (403), payload (400).
    """

    permission_classes = [LabRequestPermission]
    http_method_names = ['patch', 'options']

    def patch(self, request, pk, *args, **kwargs):
        lab_request = _lab_requests().filter(id=pk).first()
        if lab_request is None:
            raise NotFound('Lab request not found')

        if lab_request.doctor_id != request.user.id:
            raise PermissionDenied('You are not assigned to this lab request')

        serializer = LabResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        lab_request = submit_result(lab_request, result=serializer.validated_data['result'])
        log_clinic_action(
            request.user,
            'lab_result_submitted',
            patient_id=lab_request.appointment.patient_id,
            lab_request_id=lab_request.id,
        )

        return Response(
            {
                'message': 'Test result submitted successfully',
                'labRequest': LabRequestReadSerializer(lab_request).data,
            },
            status=status.HTTP_200_OK,
        )


class LabRequestStatsView(APIView):
    """GET /api/lab-requests/stats/"""

    permission_classes = [IsClinicStaff]

    def get(self, request, *args, **kwargs):
        return Response({'stats': lab_request_stats()}, status=status.HTTP_200_OK)
