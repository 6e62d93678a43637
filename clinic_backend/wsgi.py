"""
WSGI config for the clinic_backend project.

It exposes the WSGI callable as a module-level variable named ``application``.
Deployments should set DJANGO_SETTINGS_MODULE (e.g. ``clinic_backend.settings_prod``).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinic_backend.settings")

application = get_wsgi_application()
