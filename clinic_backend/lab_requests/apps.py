from django.apps import AppConfig


class LabRequestsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'clinic_backend.lab_requests'
    verbose_name = 'Lab Requests'
