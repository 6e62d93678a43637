from __future__ import annotations

from unittest.mock import patch

from django.test import TestCase

from rest_framework.test import APIClient

from clinic_backend.appointments.models import Appointment
from clinic_backend.core.models import Role, User
from clinic_backend.lab_requests.models import LabRequest
from clinic_backend.medical.models import MedicalDescription
from clinic_backend.patients.models import Patient


class AppointmentAPITest(TestCase):
    """Tests for /api/appointments/ endpoints.

    RBAC: nurse and doctor = full access.
    """

    databases = {"default"}

    def setUp(self):
        self.role_nurse, _ = Role.objects.get_or_create(name="nurse", defaults={"label": "Nurse"})
        self.role_doctor, _ = Role.objects.get_or_create(name="doctor", defaults={"label": "Doctor"})

        self.nurse = User.objects.create_user(
            username="nurse_appt_test",
            email="nurse_appt@example.com",
            password="DummyPass123!",
            role=self.role_nurse,
        )
        self.doctor = User.objects.create_user(
            username="doctor_appt_test",
            email="doctor_appt@example.com",
            password="DummyPass123!",
            role=self.role_doctor,
        )
        self.no_role = User.objects.create_user(
            username="norole_appt_test",
            email="norole_appt@example.com",
            password="DummyPass123!",
        )

        self.patient = Patient.objects.create(full_name="Jane Roe", age=40, gender="female")
        self.other_patient = Patient.objects.create(full_name="John Roe", age=42, gender="male")
        self.appointment = Appointment.objects.create(patient=self.patient, created_by=self.nurse)

        self.client = APIClient()

    def _client_for(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    # ========== LIST TESTS ==========

    def test_list_embeds_patient_fields(self):
        client = self._client_for(self.nurse)
        response = client.get("/api/appointments/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data["appointments"]), 1)
        item = response.data["appointments"][0]
        self.assertEqual(item["patient_id"], self.patient.id)
        self.assertEqual(item["patient_name"], "Jane Roe")
        self.assertEqual(item["patient_age"], 40)
        self.assertEqual(item["patient_gender"], "female")

    def test_list_filter_by_patient(self):
        Appointment.objects.create(patient=self.other_patient)

        client = self._client_for(self.doctor)
        response = client.get(f"/api/appointments/?patient_id={self.other_patient.id}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data["appointments"]), 1)
        self.assertEqual(response.data["appointments"][0]["patient_id"], self.other_patient.id)

    def test_list_filter_bad_patient_id_400(self):
        client = self._client_for(self.nurse)
        response = client.get("/api/appointments/?patient_id=abc")

        self.assertEqual(response.status_code, 400)

    def test_list_unauthenticated_401(self):
        response = self.client.get("/api/appointments/")

        self.assertEqual(response.status_code, 401)

    def test_list_without_role_forbidden(self):
        client = self._client_for(self.no_role)
        response = client.get("/api/appointments/")

        self.assertEqual(response.status_code, 403)

    # ========== CREATE TESTS ==========

    @patch("clinic_backend.appointments.views.log_clinic_action")
    def test_create_starts_pending_with_flags_off(self, mock_log):
        client = self._client_for(self.doctor)
        data = {"patient_id": self.patient.id, "is_referred": True, "is_lab_requested": True}

        response = client.post("/api/appointments/", data, format="json")

        self.assertEqual(response.status_code, 201)
        created = Appointment.objects.get(id=response.data["appointment"]["id"])
        self.assertEqual(created.status, "pending")
        self.assertFalse(created.is_referred)
        self.assertFalse(created.is_lab_requested)
        self.assertEqual(created.created_by, self.doctor)
        mock_log.assert_called_once()
        self.assertEqual(mock_log.call_args[0][1], "appointment_created")

    def test_create_missing_patient_id_400(self):
        client = self._client_for(self.nurse)

        response = client.post("/api/appointments/", {}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Missing required fields: patient_id")

    def test_create_unknown_patient_404(self):
        client = self._client_for(self.nurse)

        response = client.post("/api/appointments/", {"patient_id": 99999}, format="json")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Patient not found")

    def test_create_with_doctor_assignment(self):
        client = self._client_for(self.nurse)
        data = {"patient_id": self.patient.id, "doctor_id": self.doctor.id}

        response = client.post("/api/appointments/", data, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["appointment"]["doctor"]["id"], self.doctor.id)

    def test_create_with_non_doctor_assignment_400(self):
        client = self._client_for(self.nurse)
        data = {"patient_id": self.patient.id, "doctor_id": self.nurse.id}

        response = client.post("/api/appointments/", data, format="json")

        self.assertEqual(response.status_code, 400)

    def test_create_without_role_forbidden(self):
        client = self._client_for(self.no_role)

        response = client.post("/api/appointments/", {"patient_id": self.patient.id}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(Appointment.objects.count(), 1)

    # ========== RETRIEVE / UPDATE / DELETE TESTS ==========

    def test_retrieve(self):
        client = self._client_for(self.nurse)
        response = client.get(f"/api/appointments/{self.appointment.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["appointment"]["status"], "pending")
        self.assertFalse(response.data["appointment"]["is_referred"])
        self.assertFalse(response.data["appointment"]["is_lab_requested"])

    def test_retrieve_not_found(self):
        client = self._client_for(self.nurse)
        response = client.get("/api/appointments/99999/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Appointment not found")

    def test_update_writes_only_given_fields(self):
        client = self._client_for(self.doctor)

        response = client.put(
            f"/api/appointments/{self.appointment.id}/",
            {"is_referred": True},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["message"], "Appointment updated successfully")
        self.appointment.refresh_from_db()
        self.assertTrue(self.appointment.is_referred)
        self.assertFalse(self.appointment.is_lab_requested)
        self.assertEqual(self.appointment.status, "pending")

    def test_update_accepts_both_flags(self):
        client = self._client_for(self.nurse)

        response = client.put(
            f"/api/appointments/{self.appointment.id}/",
            {"is_referred": True, "is_lab_requested": True, "status": "diagnosed"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.appointment.refresh_from_db()
        self.assertTrue(self.appointment.is_referred)
        self.assertTrue(self.appointment.is_lab_requested)
        self.assertEqual(self.appointment.status, "diagnosed")

    def test_update_invalid_status_400(self):
        client = self._client_for(self.nurse)

        response = client.put(
            f"/api/appointments/{self.appointment.id}/",
            {"status": "cancelled"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid status", response.data["error"])

    def test_update_not_found(self):
        client = self._client_for(self.nurse)

        response = client.put("/api/appointments/99999/", {"status": "pending"}, format="json")

        self.assertEqual(response.status_code, 404)

    def test_delete_cascades_to_lab_requests(self):
        LabRequest.objects.create(
            appointment=self.appointment,
            nurse=self.nurse,
            doctor=self.doctor,
            test_type="X-Ray",
        )
        client = self._client_for(self.nurse)

        response = client.delete(f"/api/appointments/{self.appointment.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"message": "Appointment deleted successfully"})
        self.assertFalse(Appointment.objects.filter(id=self.appointment.id).exists())
        self.assertEqual(LabRequest.objects.count(), 0)

    def test_deleting_patient_cascades(self):
        self.patient.delete()

        self.assertFalse(Appointment.objects.filter(id=self.appointment.id).exists())


class AppointmentWorkflowTest(TestCase):
    """Tests for POST /api/appointments/<pk>/continue/."""

    databases = {"default"}

    def setUp(self):
        self.role_nurse, _ = Role.objects.get_or_create(name="nurse", defaults={"label": "Nurse"})
        self.role_doctor, _ = Role.objects.get_or_create(name="doctor", defaults={"label": "Doctor"})

        self.nurse = User.objects.create_user(
            username="nurse_flow_test",
            email="nurse_flow@example.com",
            password="DummyPass123!",
            role=self.role_nurse,
        )
        self.doctor = User.objects.create_user(
            username="doctor_flow_test",
            email="doctor_flow@example.com",
            password="DummyPass123!",
            role=self.role_doctor,
        )
        self.specialist = User.objects.create_user(
            username="specialist_flow_test",
            email="specialist_flow@example.com",
            password="DummyPass123!",
            role=self.role_doctor,
        )

        self.patient = Patient.objects.create(full_name="Jane Roe", age=40, gender="female")
        self.appointment = Appointment.objects.create(patient=self.patient, created_by=self.nurse)
        self.url = f"/api/appointments/{self.appointment.id}/continue/"

    def _client_for(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    # ========== LAB REQUEST ==========

    def test_lab_request_sets_flags_and_creates_request(self):
        self.appointment.is_referred = True
        self.appointment.save()
        client = self._client_for(self.nurse)

        response = client.post(
            self.url,
            {"action": "lab-request", "test_type": "Blood Test", "doctor_id": self.doctor.id, "reason": "Fatigue"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.appointment.refresh_from_db()
        self.assertTrue(self.appointment.is_lab_requested)
        self.assertFalse(self.appointment.is_referred)
        self.assertEqual(self.appointment.status, "pending")

        lab_request = LabRequest.objects.get(appointment=self.appointment)
        self.assertEqual(lab_request.status, "pending")
        self.assertEqual(lab_request.nurse, self.nurse)
        self.assertEqual(lab_request.doctor, self.doctor)
        self.assertEqual(response.data["labRequest"]["id"], lab_request.id)

    def test_lab_request_by_doctor_forbidden_before_validation(self):
        client = self._client_for(self.doctor)

        response = client.post(self.url, {"action": "lab-request"}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(LabRequest.objects.count(), 0)

    def test_lab_request_missing_fields_makes_no_writes(self):
        client = self._client_for(self.nurse)

        response = client.post(self.url, {"action": "lab-request", "test_type": "Blood Test"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Missing required fields: doctor_id")
        self.appointment.refresh_from_db()
        self.assertFalse(self.appointment.is_lab_requested)

    def test_lab_request_non_doctor_assignee_makes_no_writes(self):
        client = self._client_for(self.nurse)

        response = client.post(
            self.url,
            {"action": "lab-request", "test_type": "Blood Test", "doctor_id": self.nurse.id},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.appointment.refresh_from_db()
        self.assertFalse(self.appointment.is_lab_requested)
        self.assertEqual(LabRequest.objects.count(), 0)

    @patch("clinic_backend.appointments.services.workflow.create_lab_request")
    def test_lab_request_partial_failure_reports_completed_steps(self, mock_create):
        from django.db import DatabaseError

        mock_create.side_effect = DatabaseError("insert failed")
        client = self._client_for(self.nurse)

        response = client.post(
            self.url,
            {"action": "lab-request", "test_type": "Blood Test", "doctor_id": self.doctor.id},
            format="json",
        )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["details"]["action"], "lab-request")
        self.assertEqual(response.data["details"]["failed_step"], "create_lab_request")
        self.assertEqual(response.data["details"]["completed_steps"], ["update_appointment"])

        # first step stays committed
        self.appointment.refresh_from_db()
        self.assertTrue(self.appointment.is_lab_requested)
        self.assertEqual(LabRequest.objects.count(), 0)

    # ========== REFER DOCTOR ==========

    def test_refer_doctor_creates_referral_appointment(self):
        client = self._client_for(self.doctor)

        response = client.post(
            self.url,
            {"action": "refer-doctor", "doctor_id": self.specialist.id},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.appointment.refresh_from_db()
        self.assertTrue(self.appointment.is_referred)
        self.assertFalse(self.appointment.is_lab_requested)

        referral = Appointment.objects.get(id=response.data["referralAppointment"]["id"])
        self.assertEqual(referral.patient, self.patient)
        self.assertEqual(referral.doctor, self.specialist)
        self.assertEqual(referral.status, "pending")
        self.assertFalse(referral.is_referred)
        self.assertFalse(referral.is_lab_requested)

    @patch("clinic_backend.appointments.services.workflow.create_appointment")
    def test_refer_doctor_partial_failure_keeps_flag(self, mock_create):
        from django.db import DatabaseError

        mock_create.side_effect = DatabaseError("insert failed")
        client = self._client_for(self.nurse)

        response = client.post(
            self.url,
            {"action": "refer-doctor", "doctor_id": self.specialist.id},
            format="json",
        )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["details"]["action"], "refer-doctor")
        self.assertEqual(response.data["details"]["failed_step"], "create_referral_appointment")
        self.assertEqual(response.data["details"]["completed_steps"], ["update_appointment"])

        self.appointment.refresh_from_db()
        self.assertTrue(self.appointment.is_referred)
        self.assertEqual(Appointment.objects.count(), 1)

    @patch("clinic_backend.appointments.views.log_clinic_action")
    def test_continue_logs_workflow_action(self, mock_log):
        client = self._client_for(self.doctor)

        response = client.post(
            self.url,
            {"action": "refer-doctor", "doctor_id": self.specialist.id},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        mock_log.assert_called_once()
        self.assertEqual(mock_log.call_args[0][1], "appointment_continued")
        self.assertEqual(mock_log.call_args[1]["workflow_action"], "refer-doctor")
        self.assertEqual(mock_log.call_args[1]["appointment_id"], self.appointment.id)

    def test_continue_answers_201_with_real_logging(self):
        client = self._client_for(self.nurse)

        with self.assertLogs("clinic_backend.core.utils", level="INFO") as logs:
            response = client.post(
                self.url,
                {"action": "lab-request", "test_type": "Blood Test", "doctor_id": self.doctor.id},
                format="json",
            )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(any("appointment_continued" in line for line in logs.output))
        self.assertEqual(LabRequest.objects.filter(appointment=self.appointment).count(), 1)

    def test_refer_doctor_unknown_doctor_400(self):
        client = self._client_for(self.nurse)

        response = client.post(self.url, {"action": "refer-doctor", "doctor_id": 99999}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(Appointment.objects.count(), 1)

    # ========== DIAGNOSE ==========

    def test_diagnose_records_description_and_sets_status(self):
        client = self._client_for(self.doctor)

        response = client.post(
            self.url,
            {
                "action": "diagnose",
                "description": "Seasonal flu",
                "notes": "Rest",
                "prescriptions": [{"name": "Paracetamol", "dosage": "500 mg", "frequency": "3x daily"}],
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.appointment.refresh_from_db()
        self.assertEqual(self.appointment.status, "diagnosed")

        md = MedicalDescription.objects.get(appointment=self.appointment)
        self.assertEqual(md.patient, self.patient)
        self.assertEqual(md.doctor, self.doctor)
        self.assertEqual(md.prescriptions[0]["name"], "Paracetamol")

    def test_diagnose_by_nurse_forbidden_by_default(self):
        client = self._client_for(self.nurse)

        response = client.post(self.url, {"action": "diagnose", "description": "Flu"}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(MedicalDescription.objects.count(), 0)

    def test_diagnose_by_nurse_allowed_when_enabled(self):
        client = self._client_for(self.nurse)

        with self.settings(CLINIC_ALLOW_NURSE_DIAGNOSIS=True):
            response = client.post(self.url, {"action": "diagnose", "description": "Flu"}, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(MedicalDescription.objects.get().doctor, self.nurse)

    @patch("clinic_backend.appointments.services.workflow.update_appointment")
    def test_diagnose_partial_failure_keeps_description(self, mock_update):
        from django.db import DatabaseError

        mock_update.side_effect = DatabaseError("update failed")
        client = self._client_for(self.doctor)

        response = client.post(self.url, {"action": "diagnose", "description": "Flu"}, format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["details"]["completed_steps"], ["create_medical_description"])
        self.assertEqual(MedicalDescription.objects.count(), 1)
        self.appointment.refresh_from_db()
        self.assertEqual(self.appointment.status, "pending")

    # ========== GENERAL ==========

    def test_invalid_action_400(self):
        client = self._client_for(self.nurse)

        response = client.post(self.url, {"action": "discharge"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid action", response.data["error"])

    def test_unknown_appointment_404(self):
        client = self._client_for(self.nurse)

        response = client.post(
            "/api/appointments/99999/continue/",
            {"action": "refer-doctor", "doctor_id": self.doctor.id},
            format="json",
        )

        self.assertEqual(response.status_code, 404)


class ClinicScenarioTest(TestCase):
    """Nurse registers a patient, orders a lab test, doctor submits the result."""

    databases = {"default"}

    def setUp(self):
        role_nurse, _ = Role.objects.get_or_create(name="nurse", defaults={"label": "Nurse"})
        role_doctor, _ = Role.objects.get_or_create(name="doctor", defaults={"label": "Doctor"})
        self.nurse = User.objects.create_user(
            username="nurse_scenario",
            email="nurse_scenario@example.com",
            password="DummyPass123!",
            role=role_nurse,
        )
        self.doctor = User.objects.create_user(
            username="doctor_scenario",
            email="doctor_scenario@example.com",
            password="DummyPass123!",
            role=role_doctor,
        )
        self.nurse_client = APIClient()
        self.nurse_client.force_authenticate(user=self.nurse)
        self.doctor_client = APIClient()
        self.doctor_client.force_authenticate(user=self.doctor)

    def test_lab_request_round_trip(self):
        response = self.nurse_client.post(
            "/api/patients/",
            {"full_name": "Jane Doe", "age": 34, "gender": "female"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        patient_id = response.data["patient"]["id"]

        response = self.nurse_client.post("/api/appointments/", {"patient_id": patient_id}, format="json")
        self.assertEqual(response.status_code, 201)
        appointment_id = response.data["appointment"]["id"]
        self.assertEqual(response.data["appointment"]["status"], "pending")

        response = self.nurse_client.post(
            f"/api/appointments/{appointment_id}/continue/",
            {"action": "lab-request", "test_type": "Blood Test", "doctor_id": self.doctor.id},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["appointment"]["is_lab_requested"])
        lab_request_id = response.data["labRequest"]["id"]
        self.assertEqual(response.data["labRequest"]["status"], "pending")

        response = self.doctor_client.patch(
            f"/api/lab-requests/{lab_request_id}/",
            {"result": "WBC normal", "status": "completed"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["labRequest"]["status"], "completed")
        self.assertEqual(response.data["labRequest"]["result"], "WBC normal")

        response = self.nurse_client.delete(f"/api/appointments/{appointment_id}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"message": "Appointment deleted successfully"})
        self.assertFalse(LabRequest.objects.filter(id=lab_request_id).exists())
