"""
Device inventory views.

Any authenticated user may browse devices and record a completed
calibration; creating, editing and deleting devices is reserved for
administrators.  The QR code endpoint renders a PNG label that encodes
the device's id and code for scanning on the ward.
"""
from __future__ import annotations

import io
import json
import logging

import qrcode
from django.db.models import Prefetch, Q
from django.http import HttpResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Attachment, Device, Report
from ..permissions import IsAdminOrReadOnly
from ..serializers.device import CalibrationUpdateSerializer, DeviceListQuerySerializer, DeviceSerializer
from ..services.calibration import record_calibration
from ..services.notifications import serialize_notification
from .attachments import serialize_attachment
from .common import get_device
from .documents import serialize_document
from .reports import serialize_report

logger = logging.getLogger('medtrack.calibration')


def _serialize(device: Device, **related) -> dict:
    data = DeviceSerializer(device).data
    data.update(related)
    return data


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def devices_list(request):
    if request.method == 'GET':
        q = DeviceListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = q.validated_data
        qs = Device.objects.prefetch_related(
            Prefetch('attachments', queryset=Attachment.objects.select_related('uploaded_by'))
        )
        term = (params.get('q') or '').strip()
        if term:
            qs = qs.filter(
                Q(name__icontains=term)
                | Q(code__icontains=term)
                | Q(serial_number__icontains=term)
                | Q(location__icontains=term)
                | Q(category__icontains=term)
            )
        if params.get('status'):
            qs = qs.filter(status=params['status'])
        return Response([
            _serialize(d, attachments=[serialize_attachment(a) for a in d.attachments.all()])
            for d in qs.order_by('-created_at', '-id')
        ])

    s = DeviceSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    device = s.save()
    logger.info("Device %s created by user %s", device.code, request.user.id)
    return Response(DeviceSerializer(device).data, status=201)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def device_detail(request, pk: int):
    device = get_device(pk)
    if request.method == 'GET':
        reports = Report.objects.filter(device=device).select_related('user').order_by('-created_at')
        return Response(_serialize(
            device,
            documents=[serialize_document(d) for d in device.documents.order_by('-created_at')],
            attachments=[
                serialize_attachment(a)
                for a in device.attachments.select_related('uploaded_by').order_by('-created_at')
            ],
            reports=[serialize_report(r, include_device=False) for r in reports],
        ))
    if request.method == 'DELETE':
        device.delete()
        logger.info("Device %s deleted by user %s", device.code, request.user.id)
        return Response({'message': 'Device deleted'})

    s = DeviceSerializer(device, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    device = s.save()
    return Response(DeviceSerializer(device).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def device_calibration(request, pk: int):
    """Record a completed calibration and move the next due date."""
    device = get_device(pk)
    s = CalibrationUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    notification = record_calibration(
        device,
        vd['next_calibration_date'],
        calibration_by=vd.get('calibration_by') or getattr(request.user, 'name', ''),
        notes=vd.get('notes') or '',
    )
    device.refresh_from_db()
    return Response({
        'message': 'Calibration updated',
        'device': DeviceSerializer(device).data,
        'notification': serialize_notification(notification),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def device_qrcode(request, pk: int):
    device = get_device(pk)
    payload = json.dumps({'type': 'medical_device', 'id': device.id, 'code': device.code})
    img = qrcode.make(payload)
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return HttpResponse(buf.getvalue(), content_type='image/png')
