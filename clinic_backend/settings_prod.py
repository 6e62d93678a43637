"""
Production settings for the clinic backend.

Usage:
    DJANGO_SETTINGS_MODULE=clinic_backend.settings_prod gunicorn clinic_backend.wsgi

Required environment:
    DJANGO_SECRET_KEY, DATABASE_URL (PostgreSQL), DJANGO_ALLOWED_HOSTS
"""

from .settings import *  # noqa: F401,F403
from .settings import BASE_DIR, _env, _env_bool, _env_int

import dj_database_url


DEBUG = False

SECRET_KEY = os.environ['DJANGO_SECRET_KEY']  # noqa: F405

if not _env('DATABASE_URL'):
    raise RuntimeError('DATABASE_URL is required in production and must point to PostgreSQL.')

DATABASES = {
    'default': dj_database_url.config(
        env='DATABASE_URL',
        conn_max_age=_env_int('DB_CONN_MAX_AGE', 60),
    ),
}

CORS_ALLOW_ALL_ORIGINS = False


# ---------------------------------------------------------
# SECURITY
# ---------------------------------------------------------

SECURE_SSL_REDIRECT = _env_bool('SECURE_SSL_REDIRECT', default=True)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = _env_int('SECURE_HSTS_SECONDS', 31536000)
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
X_FRAME_OPTIONS = 'DENY'


# ---------------------------------------------------------
# LOGGING: console + rotating file
# ---------------------------------------------------------

LOG_DIR = BASE_DIR / 'logs'
try:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
except OSError:
    # read-only filesystem
    LOG_DIR = Path('/tmp')  # noqa: F405

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'clinic.log',
            'maxBytes': 10485760,  # 10 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': LOG_LEVEL,  # noqa: F405
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': 'WARNING',
            'propagate': False,
        },
        'django.security': {
            'handlers': ['console', 'file'],
            'level': 'WARNING',
            'propagate': False,
        },
        'clinic_backend': {
            'handlers': ['console', 'file'],
            'level': LOG_LEVEL,  # noqa: F405
            'propagate': False,
        },
    },
}


# ---------------------------------------------------------
# SENTRY (Optional)
# ---------------------------------------------------------

SENTRY_DSN = _env('SENTRY_DSN', '')
if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[DjangoIntegration()],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
