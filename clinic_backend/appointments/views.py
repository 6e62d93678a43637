"""Appointment views.

- AppointmentListCreateView: list (``?patient_id=``) / create
- AppointmentDetailView: retrieve / partial update (PUT) / delete
- AppointmentContinueView: run a workflow action on an appointment
"""

from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from clinic_backend.appointments.models import Appointment
from clinic_backend.appointments.permissions import AppointmentPermission
from clinic_backend.appointments.serializers import (
    ACTION_DIAGNOSE,
    ACTION_LAB_REQUEST,
    WORKFLOW_ACTIONS,
    AppointmentCreateSerializer,
    AppointmentReadSerializer,
    AppointmentUpdateSerializer,
    ContinueAppointmentSerializer,
)
from clinic_backend.appointments.services import (
    authorize_action,
    continue_appointment,
    create_appointment,
    update_appointment,
)
from clinic_backend.core.utils import get_doctor_or_400, int_query_param, log_clinic_action
from clinic_backend.lab_requests.serializers import LabRequestReadSerializer
from clinic_backend.medical.serializers import MedicalDescriptionReadSerializer
from clinic_backend.patients.models import Patient


def _appointments():
    return Appointment.objects.select_related('patient', 'doctor')


def _get_appointment(pk) -> Appointment:
    appointment = _appointments().filter(id=pk).first()
    if appointment is None:
        raise NotFound('Appointment not found')
    return appointment


class AppointmentListCreateView(generics.ListCreateAPIView):
    """GET /api/appointments/[?patient_id=]  POST /api/appointments/"""

    permission_classes = [AppointmentPermission]

    def get_queryset(self):
        qs = _appointments()
        patient_id = int_query_param(self.request, 'patient_id')
        if patient_id is not None:
            qs = qs.filter(patient_id=patient_id)
        return qs

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return AppointmentCreateSerializer
        return AppointmentReadSerializer

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'appointments': serializer.data}, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        data = write_serializer.validated_data

        patient = Patient.objects.filter(id=data['patient_id']).first()
        if patient is None:
            raise NotFound('Patient not found')

        doctor = None
        if data.get('doctor_id'):
            doctor = get_doctor_or_400(data['doctor_id'])

        appointment = create_appointment(patient=patient, created_by=request.user, doctor=doctor)
        log_clinic_action(request.user, 'appointment_created', patient_id=patient.id, appointment_id=appointment.id)

        return Response(
            {
                'message': 'Appointment created successfully',
                'appointment': AppointmentReadSerializer(appointment).data,
            },
            status=status.HTTP_201_CREATED,
        )


class AppointmentDetailView(APIView):
    """GET/PUT/DELETE /api/appointments/<pk>/

    PUT only writes the keys present in the body; any combination of the two
    indicator flags is accepted.
    """

    permission_classes = [AppointmentPermission]
    http_method_names = ['get', 'put', 'delete', 'head', 'options']

    def get(self, request, pk, *args, **kwargs):
        appointment = _get_appointment(pk)
        return Response({'appointment': AppointmentReadSerializer(appointment).data}, status=status.HTTP_200_OK)

    def put(self, request, pk, *args, **kwargs):
        serializer = AppointmentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        appointment = _get_appointment(pk)

        appointment = update_appointment(appointment, **serializer.validated_data)
        log_clinic_action(
            request.user,
            'appointment_updated',
            patient_id=appointment.patient_id,
            appointment_id=appointment.id,
            fields=sorted(serializer.validated_data),
        )

        return Response(
            {
                'message': 'Appointment updated successfully',
                'appointment': AppointmentReadSerializer(appointment).data,
            },
            status=status.HTTP_200_OK,
        )

    def delete(self, request, pk, *args, **kwargs):
        appointment = _get_appointment(pk)
        appointment_id, patient_id = appointment.id, appointment.patient_id
        # lab requests and medical descriptions go with it (FK cascade)
        appointment.delete()
        log_clinic_action(request.user, 'appointment_deleted', patient_id=patient_id, appointment_id=appointment_id)
        return Response({'message': 'Appointment deleted successfully'}, status=status.HTTP_200_OK)


class AppointmentContinueView(APIView):
    """POST /api/appointments/<pk>/continue/

    Body: {"action": "lab-request" | "refer-doctor" | "diagnose", ...}

    - lab-request: {"test_type", "doctor_id", "reason"?} (nurse)
    - refer-doctor: {"doctor_id"} (nurse, doctor)
    - diagnose: {"description", "notes"?, "prescriptions"?} (doctor)
    """

    permission_classes = [AppointmentPermission]

    def post(self, request, pk, *args, **kwargs):
        appointment = _get_appointment(pk)

        # role before payload validation
        action = request.data.get('action') if hasattr(request.data, 'get') else None
        if action in WORKFLOW_ACTIONS:
            authorize_action(action, request.user)

        serializer = ContinueAppointmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        action = serializer.validated_data['action']

        results = continue_appointment(
            appointment=appointment,
            action=action,
            data=serializer.validated_data,
            user=request.user,
        )
        log_clinic_action(
            request.user,
            'appointment_continued',
            patient_id=appointment.patient_id,
            appointment_id=appointment.id,
            workflow_action=action,
        )

        appointment.refresh_from_db()
        body = {'appointment': AppointmentReadSerializer(appointment).data}
        if action == ACTION_LAB_REQUEST:
            body['message'] = 'Lab request created successfully'
            body['labRequest'] = LabRequestReadSerializer(results['create_lab_request']).data
        elif action == ACTION_DIAGNOSE:
            body['message'] = 'Diagnosis recorded successfully'
            body['medicalDescription'] = MedicalDescriptionReadSerializer(
                results['create_medical_description']
            ).data
        else:
            body['message'] = 'Patient referred successfully'
            body['referralAppointment'] = AppointmentReadSerializer(
                results['create_referral_appointment']
            ).data

        return Response(body, status=status.HTTP_201_CREATED)
