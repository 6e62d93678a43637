"""Core app views.

Contains:
- health: Health check endpoint
- SignupView / LoginView / RefreshView / LogoutView: JWT authentication
- MeView: Current authenticated user info
- UserListView: Staff directory (e.g. ``?role=doctor`` to pick an assignee)
"""

import logging

from django.contrib.auth import authenticate
from django.db import connection
from django.http import JsonResponse

from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from rest_framework_simplejwt.tokens import RefreshToken

from clinic_backend.core.models import Role, User
from clinic_backend.core.permissions import IsClinicStaff
from clinic_backend.core.serializers import (
    LoginSerializer,
    RefreshSerializer,
    SignupSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


def health(request):
    """Health check endpoint - no authentication required."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1;')
    except Exception as exc:
        logger.error('health check failed: %s', exc)
        return JsonResponse({'status': 'error', 'error': str(exc)}, status=503)

    return JsonResponse({'status': 'ok'})


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role_name
    return refresh


class SignupView(APIView):
    """Register a nurse or doctor account.

    POST /api/auth/signup/
    Body: {"email", "password", "first_name", "last_name", "role"}
    Returns 201 {"message", "user"}; 409 if the email is already registered.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info('signup user_id=%s role=%s', user.id, user.role_name)
        return Response(
            {'message': 'Sign up successful', 'user': UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """Obtain JWT access and refresh tokens.

    POST /api/auth/login/
    Body: {"email": "...", "password": "..."}
    Returns: {"message", "user": {...}, "access": "...", "refresh": "..."}
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def get_authenticate_header(self, request):
        # without authenticators DRF would turn AuthenticationFailed into 403
        return 'Bearer realm="api"'

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data['email']
        account = User.objects.filter(email__iexact=email).only('username').first()
        user = None
        if account is not None:
            user = authenticate(
                request,
                username=account.username,
                password=serializer.validated_data['password'],
            )
        if user is None:
            raise AuthenticationFailed('Invalid login credentials')

        refresh = _tokens_for(user)
        logger.info('login user_id=%s', user.id)
        return Response(
            {
                'message': 'Login successful',
                'user': UserSerializer(user).data,
                'access': str(refresh.access_token),
                'refresh': str(refresh),
            },
            status=status.HTTP_200_OK,
        )


class RefreshView(APIView):
    """Refresh JWT access token.

    POST /api/auth/refresh/
    Body: {"refresh": "..."}
    Returns: {"access": "..."}
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refresh = RefreshToken(serializer.validated_data['refresh'])
        return Response({'access': str(refresh.access_token)}, status=status.HTTP_200_OK)


class LogoutView(APIView):
    """Invalidate a refresh token.

    POST /api/auth/logout/
    Body: {"refresh": "..."}
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        RefreshToken(serializer.validated_data['refresh']).blacklist()
        return Response({'message': 'Logged out successfully'}, status=status.HTTP_200_OK)


class MeView(APIView):
    """Get current authenticated user info.

    GET /api/user/me/
    Returns: {"user": {"id", "email", "first_name", "last_name", "role"}}
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response({'user': UserSerializer(request.user).data}, status=status.HTTP_200_OK)


class UserListView(APIView):
    """List clinic staff.

    GET /api/users/?role=doctor|nurse
    """

    permission_classes = [IsClinicStaff]

    def get(self, request, *args, **kwargs):
        qs = User.objects.filter(is_active=True).select_related('role')
        role = request.query_params.get('role')
        if role in Role.NAMES:
            qs = qs.filter(role__name=role)
        return Response({'users': UserSerializer(qs, many=True).data}, status=status.HTTP_200_OK)
