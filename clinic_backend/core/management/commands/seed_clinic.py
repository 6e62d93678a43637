"""
Clinic seed command: reproducible demo data.

Usage:
    python manage.py seed_clinic           # staff, patients, appointments, lab requests, diagnoses
    python manage.py seed_clinic --flush   # delete clinic data first (roles are kept)

Staff accounts are created with the password given by ``--password``
(default ``ClinicDemo123!``).
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from clinic_backend.appointments.models import Appointment
from clinic_backend.appointments.services import create_appointment, update_appointment
from clinic_backend.core.models import Role, User
from clinic_backend.lab_requests.models import LabRequest
from clinic_backend.lab_requests.services import create_lab_request, submit_result
from clinic_backend.medical.models import MedicalDescription
from clinic_backend.medical.services import record_medical_description
from clinic_backend.patients.models import Patient


STAFF = [
    ("nurse.ada@clinic.local", "Ada", "Mensah", Role.NURSE),
    ("nurse.ben@clinic.local", "Ben", "Okafor", Role.NURSE),
    ("dr.grace@clinic.local", "Grace", "Hopper", Role.DOCTOR),
    ("dr.james@clinic.local", "James", "Lind", Role.DOCTOR),
]

PATIENTS = [
    ("Jane Doe", 34, "female", "12 Harbor Road", "555-0101"),
    ("John Smith", 52, "male", "7 Hill Street", "555-0102"),
    ("Amina Yusuf", 8, "female", None, "555-0103"),
    ("Alex Morgan", 27, "other", "3 Lake View", None),
]


class Command(BaseCommand):
    help = "Seed database with demo data for the clinic backend"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete patients, appointments, lab requests, diagnoses and seeded staff before seeding.",
        )
        parser.add_argument(
            "--password",
            default="ClinicDemo123!",
            help="Password for the seeded staff accounts.",
        )

    def handle(self, *args, **options):
        self.stdout.write("=" * 60)
        self.stdout.write("  Clinic seed")
        self.stdout.write("=" * 60)

        with transaction.atomic():
            if options["flush"]:
                self._flush()

            stats = {}
            self.stdout.write("\n[1/3] Staff...")
            nurses, doctors = self._seed_staff(options["password"], stats)

            self.stdout.write("\n[2/3] Patients...")
            patients = self._seed_patients(nurses[0], stats)

            self.stdout.write("\n[3/3] Appointments, lab requests, diagnoses...")
            self._seed_visits(patients, nurses, doctors, stats)

        self.stdout.write("\nCreated records:")
        for key, value in sorted(stats.items()):
            self.stdout.write(f"  - {key}: {value}")
        self.stdout.write(self.style.SUCCESS("Seeding complete."))

    def _flush(self):
        self.stdout.write("Flushing clinic data...")
        MedicalDescription.objects.all().delete()
        LabRequest.objects.all().delete()
        Appointment.objects.all().delete()
        Patient.objects.all().delete()
        User.objects.filter(email__in=[email for email, *_ in STAFF]).delete()

    def _seed_staff(self, password, stats):
        roles = {name: Role.objects.get_or_create(name=name, defaults={"label": name.capitalize()})[0] for name in Role.NAMES}
        nurses, doctors = [], []
        created = 0
        for email, first_name, last_name, role_name in STAFF:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    role=roles[role_name],
                )
                created += 1
            (nurses if role_name == Role.NURSE else doctors).append(user)
        stats["users"] = created
        return nurses, doctors

    def _seed_patients(self, nurse, stats):
        patients = []
        for full_name, age, gender, address, contact in PATIENTS:
            patients.append(
                Patient.objects.create(
                    full_name=full_name,
                    age=age,
                    gender=gender,
                    address=address,
                    contact=contact,
                    registered_by=nurse,
                )
            )
        stats["patients"] = len(patients)
        return patients

    def _seed_visits(self, patients, nurses, doctors, stats):
        nurse, doctor = nurses[0], doctors[0]
        jane, john, amina, alex = patients

        # pending lab request
        visit = create_appointment(patient=jane, created_by=nurse)
        update_appointment(visit, is_lab_requested=True)
        create_lab_request(appointment=visit, nurse=nurse, doctor=doctor, test_type="Blood Test", reason="Fatigue")

        # completed lab request, then diagnosed
        visit = create_appointment(patient=john, created_by=nurse)
        update_appointment(visit, is_lab_requested=True)
        lab_request = create_lab_request(appointment=visit, nurse=nurse, doctor=doctor, test_type="Lipid Panel")
        submit_result(lab_request, result="LDL slightly elevated")
        record_medical_description(
            patient=john,
            appointment=visit,
            doctor=doctor,
            description="Mild hyperlipidaemia",
            notes="Diet and exercise, recheck in 3 months",
            prescriptions=[
                {"name": "Atorvastatin", "dosage": "10 mg", "frequency": "once daily", "duration": "90 days"},
            ],
        )
        update_appointment(visit, status=Appointment.STATUS_DIAGNOSED)

        # referral to a second doctor
        visit = create_appointment(patient=amina, created_by=nurses[-1])
        update_appointment(visit, is_referred=True)
        create_appointment(patient=amina, created_by=nurses[-1], doctor=doctors[-1])

        create_appointment(patient=alex, created_by=nurse)

        stats["appointments"] = Appointment.objects.count()
        stats["lab_requests"] = LabRequest.objects.count()
        stats["medical_descriptions"] = MedicalDescription.objects.count()
