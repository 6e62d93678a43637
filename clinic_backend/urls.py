"""Clinic backend URL configuration.

API routes:
    /api/health/, /api/auth/, /api/user/me/, /api/users/  - Identity (core)
    /api/patients/                                        - Patients
    /api/appointments/                                    - Appointments & workflow
    /api/lab-requests/                                    - Lab requests
    /api/medical-descriptions/                            - Diagnoses
    /api/dashboard/                                       - Aggregate statistics
"""

from django.urls import include, path

from clinic_backend.core.admin import clinic_admin_site


urlpatterns = [
    path("admin/", clinic_admin_site.urls),

    path("api/", include("clinic_backend.core.urls")),
    path("api/", include("clinic_backend.patients.urls")),
    path("api/", include("clinic_backend.appointments.urls")),
    path("api/", include("clinic_backend.lab_requests.urls")),
    path("api/", include("clinic_backend.medical.urls")),
    path("api/dashboard/", include("clinic_backend.dashboard.urls")),
]
