from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from clinic_backend.core.permissions import IsClinicStaff
from clinic_backend.dashboard.services import dashboard_stats


class DashboardStatsView(APIView):
    """GET /api/dashboard/stats/ (nurse, doctor)"""

    permission_classes = [IsClinicStaff]

    def get(self, request, *args, **kwargs):
        return Response({'stats': dashboard_stats()}, status=status.HTTP_200_OK)
