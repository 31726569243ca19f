"""
Fault report views.

Any user may report a problem with a device, optionally attaching a
photo.  Administrators review every report and move it through
``pending`` -> ``in_progress`` -> ``resolved``.
"""
from __future__ import annotations

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Report
from ..permissions import IsAdminRole
from ..serializers.report import ReportCreateSerializer, ReportStatusSerializer
from ..services.uploads import REPORT_IMAGES, store_upload
from .common import get_device

logger = logging.getLogger('medtrack.requests')


def serialize_report(r: Report, include_device: bool = True) -> dict:
    user = r.user
    data = {
        'id': r.id,
        'deviceId': r.device_id,
        'userId': r.user_id,
        'message': r.message,
        'imagePath': r.image_path,
        'status': r.status,
        'reporter': {'id': user.id, 'name': user.name, 'email': user.email} if user else None,
        'createdAt': r.created_at.isoformat() if r.created_at else None,
        'updatedAt': r.updated_at.isoformat() if r.updated_at else None,
    }
    if include_device:
        device = r.device
        data['device'] = {'id': device.id, 'name': device.name, 'code': device.code}
    return data


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_report(request, pk: int):
    device = get_device(pk)
    s = ReportCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    image = s.validated_data.get('image')
    image_path = store_upload(image, REPORT_IMAGES).path if image else None
    report = Report.objects.create(
        device=device,
        user=request.user,
        message=s.validated_data['message'],
        image_path=image_path,
    )
    logger.info("Report %s filed on device %s by user %s", report.id, device.code, request.user.id)
    return Response(serialize_report(report), status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reports_list(request):
    qs = Report.objects.select_related('device', 'user').order_by('-created_at')
    return Response([serialize_report(r) for r in qs])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def device_reports(request, pk: int):
    device = get_device(pk)
    qs = Report.objects.filter(device=device).select_related('user').order_by('-created_at')
    return Response([serialize_report(r, include_device=False) for r in qs])


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def report_status(request, pk: int):
    report = Report.objects.select_related('device', 'user').filter(pk=pk).first()
    if report is None:
        raise NotFound('Report not found')
    s = ReportStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    report.status = s.validated_data['status']
    report.save(update_fields=['status', 'updated_at'])
    return Response(serialize_report(report))
