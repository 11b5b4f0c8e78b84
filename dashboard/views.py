from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_dashboard_stats
from .serializers import DashboardStatsSerializer


class DashboardStatsView(APIView):
    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "dashboard"

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Dashboard statistics",
        description="Counts, paid revenue, six-month revenue history, status distribution, "
        "recent orders and best sellers.",
        responses=DashboardStatsSerializer,
    )
    def get(self, request):
        return Response(DashboardStatsSerializer(get_dashboard_stats()).data)
