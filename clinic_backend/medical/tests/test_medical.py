from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

from django.test import TestCase
from django.utils import timezone

from rest_framework.test import APIClient

from clinic_backend.appointments.models import Appointment
from clinic_backend.core.models import Role, User
from clinic_backend.medical.models import MedicalDescription
from clinic_backend.patients.models import Patient


class MedicalDescriptionAPITest(TestCase):
    """Tests for /api/medical-descriptions/ and patient history.

    RBAC: doctor = list, create, stats; nurse = patient history only
    (create when CLINIC_ALLOW_NURSE_DIAGNOSIS is on).
    """

    databases = {"default"}

    def setUp(self):
        self.role_nurse, _ = Role.objects.get_or_create(name="nurse", defaults={"label": "Nurse"})
        self.role_doctor, _ = Role.objects.get_or_create(name="doctor", defaults={"label": "Doctor"})

        self.nurse = User.objects.create_user(
            username="nurse_medical_test",
            email="nurse_medical@example.com",
            password="DummyPass123!",
            role=self.role_nurse,
        )
        self.doctor = User.objects.create_user(
            username="doctor_medical_test",
            email="doctor_medical@example.com",
            password="DummyPass123!",
            first_name="Dan",
            last_name="Doctor",
            role=self.role_doctor,
        )

        self.patient = Patient.objects.create(full_name="Jane Roe", age=40, gender="female", contact="555-0100")
        self.other_patient = Patient.objects.create(full_name="John Roe", age=42, gender="male")
        self.appointment = Appointment.objects.create(patient=self.patient)

        self.existing = MedicalDescription.objects.create(
            patient=self.patient,
            doctor=self.doctor,
            description="Migraine",
        )

        self.client = APIClient()

    def _client_for(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    # ========== LIST TESTS ==========

    def test_list_as_doctor(self):
        client = self._client_for(self.doctor)
        response = client.get("/api/medical-descriptions/")

        self.assertEqual(response.status_code, 200)
        item = response.data["medicalDescriptions"][0]
        self.assertEqual(item["patient"]["full_name"], "Jane Roe")
        self.assertEqual(item["patient"]["contact"], "555-0100")
        self.assertEqual(item["doctor"]["first_name"], "Dan")

    def test_list_filter_by_patient(self):
        MedicalDescription.objects.create(patient=self.other_patient, doctor=self.doctor, description="Sprain")
        client = self._client_for(self.doctor)

        response = client.get(f"/api/medical-descriptions/?patient_id={self.other_patient.id}")

        self.assertEqual([d["description"] for d in response.data["medicalDescriptions"]], ["Sprain"])

    def test_list_as_nurse_forbidden(self):
        client = self._client_for(self.nurse)
        response = client.get("/api/medical-descriptions/")

        self.assertEqual(response.status_code, 403)

    # ========== CREATE TESTS ==========

    @patch("clinic_backend.medical.views.log_clinic_action")
    def test_create_with_patient_id(self, mock_log):
        client = self._client_for(self.doctor)
        data = {
            "patient_id": self.other_patient.id,
            "description": "Acute bronchitis",
            "notes": "Follow up in one week",
            "prescriptions": [
                {"name": "Amoxicillin", "dosage": "500 mg", "frequency": "3x daily", "duration": "7 days"},
                {"name": "Ibuprofen", "ndc": "0573-0150"},
            ],
        }

        response = client.post("/api/medical-descriptions/", data, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["message"], "Medical description created successfully")
        created = MedicalDescription.objects.get(id=response.data["medicalDescription"]["id"])
        self.assertEqual(created.doctor, self.doctor)
        self.assertIsNone(created.appointment)
        self.assertEqual([p["name"] for p in created.prescriptions], ["Amoxicillin", "Ibuprofen"])
        self.assertEqual(mock_log.call_args[1]["patient_id"], self.other_patient.id)

    def test_create_with_appointment_derives_patient(self):
        client = self._client_for(self.doctor)
        data = {"appointment_id": self.appointment.id, "description": "Flu"}

        response = client.post("/api/medical-descriptions/", data, format="json")

        self.assertEqual(response.status_code, 201)
        created = MedicalDescription.objects.get(id=response.data["medicalDescription"]["id"])
        self.assertEqual(created.patient, self.patient)
        self.assertEqual(created.appointment, self.appointment)

    def test_create_empty_prescriptions_stored_as_null(self):
        client = self._client_for(self.doctor)
        data = {"patient_id": self.patient.id, "description": "Checkup", "prescriptions": []}

        response = client.post("/api/medical-descriptions/", data, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.data["medicalDescription"]["prescriptions"])

    def test_create_prescription_requires_name(self):
        client = self._client_for(self.doctor)
        data = {"patient_id": self.patient.id, "description": "Checkup", "prescriptions": [{"dosage": "1 tab"}]}

        response = client.post("/api/medical-descriptions/", data, format="json")

        self.assertEqual(response.status_code, 400)

    def test_create_missing_description_400(self):
        client = self._client_for(self.doctor)

        response = client.post("/api/medical-descriptions/", {"patient_id": self.patient.id}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Missing required fields: description")

    def test_create_without_patient_or_appointment_400(self):
        client = self._client_for(self.doctor)

        response = client.post("/api/medical-descriptions/", {"description": "Flu"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Missing required fields: patient_id")

    def test_create_unknown_patient_404(self):
        client = self._client_for(self.doctor)

        response = client.post(
            "/api/medical-descriptions/",
            {"patient_id": 99999, "description": "Flu"},
            format="json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Patient not found")

    def test_create_unknown_appointment_404(self):
        client = self._client_for(self.doctor)

        response = client.post(
            "/api/medical-descriptions/",
            {"appointment_id": 99999, "description": "Flu"},
            format="json",
        )

        self.assertEqual(response.status_code, 404)

    def test_create_appointment_of_other_patient_400(self):
        client = self._client_for(self.doctor)
        data = {"patient_id": self.other_patient.id, "appointment_id": self.appointment.id, "description": "Flu"}

        response = client.post("/api/medical-descriptions/", data, format="json")

        self.assertEqual(response.status_code, 400)

    def test_create_as_nurse_forbidden_by_default(self):
        client = self._client_for(self.nurse)

        response = client.post(
            "/api/medical-descriptions/",
            {"patient_id": self.patient.id, "description": "Flu"},
            format="json",
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["error"], "Only doctors can create medical descriptions")

    def test_create_as_nurse_when_enabled(self):
        client = self._client_for(self.nurse)

        with self.settings(CLINIC_ALLOW_NURSE_DIAGNOSIS=True):
            response = client.post(
                "/api/medical-descriptions/",
                {"patient_id": self.patient.id, "description": "Flu"},
                format="json",
            )

        self.assertEqual(response.status_code, 201)

    def test_deleting_appointment_removes_its_descriptions(self):
        linked = MedicalDescription.objects.create(
            patient=self.patient,
            appointment=self.appointment,
            doctor=self.doctor,
            description="Flu",
        )

        self.appointment.delete()

        self.assertFalse(MedicalDescription.objects.filter(id=linked.id).exists())
        self.assertTrue(MedicalDescription.objects.filter(id=self.existing.id).exists())

    # ========== PATIENT HISTORY TESTS ==========

    def test_patient_history_as_nurse(self):
        client = self._client_for(self.nurse)

        response = client.get(f"/api/patients/{self.patient.id}/medical-descriptions/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([d["id"] for d in response.data["medicalDescriptions"]], [self.existing.id])

    def test_patient_history_unknown_patient_404(self):
        client = self._client_for(self.doctor)

        response = client.get("/api/patients/99999/medical-descriptions/")

        self.assertEqual(response.status_code, 404)

    # ========== STATS TESTS ==========

    def test_stats_counts_this_week(self):
        old = MedicalDescription.objects.create(patient=self.patient, doctor=self.doctor, description="Old")
        MedicalDescription.objects.filter(id=old.id).update(created_at=timezone.now() - timedelta(days=30))
        client = self._client_for(self.doctor)

        response = client.get("/api/medical-descriptions/stats/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["stats"], {"totalRecords": 2, "thisWeek": 1})

    def test_stats_as_nurse_forbidden(self):
        client = self._client_for(self.nurse)

        response = client.get("/api/medical-descriptions/stats/")

        self.assertEqual(response.status_code, 403)
