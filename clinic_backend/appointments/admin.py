"""
Appointments App - Admin
"""

from django.contrib import admin

from clinic_backend.appointments.models import Appointment
from clinic_backend.core.admin import clinic_admin_site


@admin.register(Appointment, site=clinic_admin_site)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "doctor", "status", "is_referred", "is_lab_requested", "created_at")
    list_filter = ("status", "is_referred", "is_lab_requested", "created_at")
    search_fields = ("patient__full_name", "doctor__first_name", "doctor__last_name")
    ordering = ("-created_at",)
    list_per_page = 50
    raw_id_fields = ("patient",)
    readonly_fields = ("id", "created_by", "created_at", "updated_at")
