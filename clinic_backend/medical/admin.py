"""
Medical App - Admin
"""

from django.contrib import admin

from clinic_backend.core.admin import clinic_admin_site
from clinic_backend.medical.models import MedicalDescription


@admin.register(MedicalDescription, site=clinic_admin_site)
class MedicalDescriptionAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "doctor", "appointment", "created_at")
    list_filter = ("created_at",)
    search_fields = ("patient__full_name", "description", "notes")
    ordering = ("-created_at",)
    list_per_page = 50
    raw_id_fields = ("patient", "appointment")
    readonly_fields = ("id", "patient", "appointment", "doctor", "description", "notes", "prescriptions", "created_at")

    def has_change_permission(self, request, obj=None):
        return False
