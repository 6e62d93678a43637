"""
Clinic - Custom Admin Site & Admin Classes
"""

from django.contrib import admin
from django.contrib.admin import AdminSite
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from .models import Role, User


class ClinicAdminSite(AdminSite):
    """Admin site for clinic staff records."""
    site_header = "Clinic Administration"
    site_title = "Clinic Admin"
    index_title = "Overview"
    site_url = None


clinic_admin_site = ClinicAdminSite(name='clinicadmin')


ROLE_COLORS = {
    Role.DOCTOR: "#1A73E8",
    Role.NURSE: "#34A853",
}


@admin.register(Role, site=clinic_admin_site)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "label", "user_count")
    search_fields = ("name", "label")
    ordering = ("name",)

    def user_count(self, obj):
        return obj.users.count()
    user_count.short_description = "Users"


@admin.register(User, site=clinic_admin_site)
class UserAdmin(DjangoUserAdmin):
    """Staff accounts with their clinic role."""

    list_display = ("email", "first_name", "last_name", "role_badge", "is_active")
    list_filter = ("role", "is_staff", "is_active")
    search_fields = ("email", "first_name", "last_name")
    ordering = ("email",)
    list_per_page = 50

    fieldsets = (
        ("Authentication", {"fields": ("username", "password")}),
        ("Personal data", {"fields": ("first_name", "last_name", "email", "role")}),
        ("Permissions", {
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
            "classes": ("collapse",),
        }),
        ("Timestamps", {"fields": ("last_login", "date_joined"), "classes": ("collapse",)}),
    )
    add_fieldsets = (
        ("New user", {
            "classes": ("wide",),
            "fields": ("username", "password1", "password2", "email", "role", "first_name", "last_name"),
        }),
    )
    readonly_fields = ("last_login", "date_joined")

    def lookup_allowed(self, lookup, value, request=None):
        # allow /clinicadmin/core/user/?role__name=doctor
        if lookup == "role__name" or lookup.startswith("role__name__"):
            return True
        return super().lookup_allowed(lookup, value, request=request)

    def role_badge(self, obj):
        if not obj.role:
            return mark_safe('<span style="color: #9AA0A6; font-style: italic;">no role</span>')
        color = ROLE_COLORS.get(obj.role.name, "#5F6368")
        return format_html(
            '<span style="background-color: {}; color: white; padding: 2px 8px; border-radius: 4px;">{}</span>',
            color, obj.role.name,
        )
    role_badge.short_description = "Role"
