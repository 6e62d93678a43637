"""Core App URLs - Authentication, Identity & Health.

Prefix: /api/
Routes:
    GET  /api/health/        - Health check (no auth)
    POST /api/auth/signup/   - Create nurse/doctor account
    POST /api/auth/login/    - JWT token obtain with user/role info
    POST /api/auth/refresh/  - JWT token refresh
    POST /api/auth/logout/   - Blacklist refresh token
    GET  /api/user/me/       - Current user info (requires auth)
    GET  /api/users/         - Staff directory (?role=doctor|nurse)
"""

from django.urls import path

from clinic_backend.core.views import (
    health,
    LoginView,
    LogoutView,
    MeView,
    RefreshView,
    SignupView,
    UserListView,
)

app_name = 'core'

urlpatterns = [
    path('health/', health, name='health'),

    path('auth/signup/', SignupView.as_view(), name='signup'),
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/refresh/', RefreshView.as_view(), name='refresh'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),

    path('user/me/', MeView.as_view(), name='me'),
    path('users/', UserListView.as_view(), name='users'),
]
