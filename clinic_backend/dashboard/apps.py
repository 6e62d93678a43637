from django.apps import AppConfig


class DashboardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'clinic_backend.dashboard'
    verbose_name = 'Dashboard'
