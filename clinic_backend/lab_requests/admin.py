"""
Lab Requests App - Admin
"""

from django.contrib import admin

from clinic_backend.core.admin import clinic_admin_site
from clinic_backend.lab_requests.models import LabRequest


@admin.register(LabRequest, site=clinic_admin_site)
class LabRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "test_type", "appointment", "nurse", "doctor", "status", "created_at", "completed_at")
    list_filter = ("status", "created_at", "completed_at")
    search_fields = ("test_type", "reason", "appointment__patient__full_name")
    ordering = ("-created_at",)
    list_per_page = 50
    raw_id_fields = ("appointment",)
    readonly_fields = ("id", "created_at", "updated_at", "completed_at")
