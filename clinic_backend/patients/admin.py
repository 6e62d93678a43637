"""
Patients App - Admin
"""

from django.contrib import admin

from clinic_backend.core.admin import clinic_admin_site
from clinic_backend.patients.models import Patient


@admin.register(Patient, site=clinic_admin_site)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "age", "gender", "contact", "registered_by", "created_at")
    list_filter = ("gender", "created_at")
    search_fields = ("full_name", "contact", "address")
    ordering = ("-created_at",)
    list_per_page = 50
    readonly_fields = ("id", "registered_by", "created_at", "updated_at")

    fieldsets = (
        ("Patient", {"fields": ("full_name", "age", "gender", "address", "contact")}),
        ("System", {"fields": ("id", "registered_by", "created_at", "updated_at"), "classes": ("collapse",)}),
    )
