"""
Notification views.

Notifications are written by the calibration sweep and by clients via
``POST /api/notifications``.  Lists are ordered by priority (highest
first) and then by creation time (newest first).
"""
from __future__ import annotations

from django.db.models import Q
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Notification
from ..serializers.notification import NotificationCreateSerializer, NotificationListQuerySerializer
from ..services.notifications import create_notification, serialize_notification
from .common import get_device


def _get_notification(pk: int) -> Notification:
    n = Notification.objects.select_related('device').filter(pk=pk).first()
    if n is None:
        raise NotFound('Notification not found')
    return n


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def notifications_list(request):
    if request.method == 'GET':
        q = NotificationListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = q.validated_data
        qs = Notification.objects.select_related('device')
        term = (params.get('search') or '').strip()
        if term:
            qs = qs.filter(
                Q(title__icontains=term)
                | Q(message__icontains=term)
                | Q(device_name__icontains=term)
                | Q(device_code__icontains=term)
            )
        if params.get('type'):
            qs = qs.filter(type=params['type'])
        if params.get('unreadOnly'):
            qs = qs.filter(is_read=False)
        if params.get('deviceId'):
            qs = qs.filter(device_id=params['deviceId'])

        total = qs.count()
        offset = params['offset']
        page = qs.order_by('-priority', '-created_at', '-id')[offset:offset + params['limit']]
        return Response({
            'success': True,
            'notifications': [serialize_notification(n) for n in page],
            'unreadCount': Notification.objects.filter(is_read=False).count(),
            'documentTypes': sorted(Notification.objects.values_list('type', flat=True).distinct()),
            'total': total,
        })

    s = NotificationCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    device = get_device(vd['deviceId'])
    notification = create_notification(
        device=device,
        title=vd['title'],
        message=vd['message'],
        type=vd['type'],
        priority=vd['priority'],
        due_date=vd.get('dueDate'),
        metadata=vd.get('metadata'),
    )
    return Response({
        'success': True,
        'message': 'Notification created',
        'notification': serialize_notification(notification),
    }, status=201)


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def notification_detail(request, pk: int):
    notification = _get_notification(pk)
    if request.method == 'DELETE':
        notification.delete()
        return Response({'success': True, 'message': 'Notification deleted'})
    return Response({'success': True, 'notification': serialize_notification(notification)})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def notification_read(request, pk: int):
    notification = _get_notification(pk)
    notification.is_read = True
    notification.save(update_fields=['is_read', 'updated_at'])
    return Response({
        'success': True,
        'message': 'Notification marked as read',
        'notification': serialize_notification(notification, include_device=False),
    })


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def notifications_read_all(request):
    updated = Notification.objects.filter(is_read=False).update(is_read=True, updated_at=timezone.now())
    return Response({'success': True, 'message': 'All notifications marked as read', 'updated': updated})
