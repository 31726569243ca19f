"""
Dashboard endpoints.

Device, report and user statistics for the home screen.  Available to
every authenticated user; the figures contain no personal data.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..services import dashboard


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_overview(request):
    return Response(dashboard.overview())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_report_trends(request):
    return Response(dashboard.report_trends())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_recent_activities(request):
    try:
        limit = int(request.query_params.get('limit', 10))
    except (TypeError, ValueError):
        limit = 10
    limit = max(1, min(limit, 100))
    return Response(dashboard.recent_activities(limit))
