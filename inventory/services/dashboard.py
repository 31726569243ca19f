"""Aggregates shown on the administrative dashboard."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from django.db.models import Count
from django.db.models.functions import TruncMonth
from django.utils import timezone

from inventory.models import Device, Document, Report, User

UPCOMING_DAYS = 30
RECENT_DAYS = 7
TREND_MONTHS = 12


def _distribution(qs, field: str) -> Dict[str, int]:
    rows = qs.exclude(**{f'{field}__isnull': True}).values(field).annotate(count=Count('id')).order_by(field)
    return {row[field]: row['count'] for row in rows}


def _months_ago(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + value.month - 1 - months
    year, month = divmod(month_index, 12)
    # Clamp the day so e.g. 31 March minus one month lands on 28/29 February
    day = value.day
    while True:
        try:
            return value.replace(year=year, month=month + 1, day=day)
        except ValueError:
            day -= 1


def overview(now: Optional[datetime] = None) -> dict:
    now = now or timezone.now()
    devices = Device.objects.all()
    reports = Report.objects.all()
    users = User.objects.all()
    since = now - timedelta(days=RECENT_DAYS)
    return {
        'devices': {
            'total': devices.count(),
            'statusDistribution': _distribution(devices, 'status'),
            'locationDistribution': _distribution(devices, 'location'),
            'categoryDistribution': _distribution(devices, 'category'),
            'upcomingCalibrations': devices.filter(
                next_calibration_date__range=(now, now + timedelta(days=UPCOMING_DAYS)),
            ).count(),
            'overdueCalibrations': devices.filter(next_calibration_date__lt=now).count(),
        },
        'reports': {
            'total': reports.count(),
            'pending': reports.filter(status='pending').count(),
            'inProgress': reports.filter(status='in_progress').count(),
            'resolved': reports.filter(status='resolved').count(),
        },
        'users': {
            'total': users.count(),
            'active': users.filter(status=User.STATUS_ACTIVE).count(),
            'suspended': users.filter(status=User.STATUS_SUSPENDED).count(),
        },
        'recentActivity': {
            'weeklyReports': reports.filter(created_at__gte=since).count(),
            'weeklyDocuments': Document.objects.filter(created_at__gte=since).count(),
        },
    }


def report_trends(now: Optional[datetime] = None) -> Dict[str, int]:
    """Report counts keyed by ``YYYY-MM`` for the last twelve months."""
    now = now or timezone.now()
    rows = (
        Report.objects.filter(created_at__gte=_months_ago(now, TREND_MONTHS))
        .annotate(month=TruncMonth('created_at'))
        .values('month')
        .annotate(count=Count('id'))
        .order_by('month')
    )
    return {row['month'].strftime('%Y-%m'): row['count'] for row in rows}


def recent_activities(limit: int = 10) -> List[dict]:
    """Latest reports and document uploads merged newest first."""
    per_kind = -(-limit // 2)
    activities = []
    for r in Report.objects.select_related('device', 'user').order_by('-created_at')[:per_kind]:
        activities.append({
            'id': r.id,
            'type': 'report',
            'action': 'Problem reported',
            'description': r.message,
            'deviceName': r.device.name,
            'deviceCode': r.device.code,
            'userName': r.user.name if r.user else 'Unknown User',
            'status': r.status,
            'createdAt': r.created_at,
            'icon': 'report_problem',
        })
    for d in Document.objects.select_related('device').order_by('-created_at')[:per_kind]:
        activities.append({
            'id': d.id,
            'type': 'document',
            'action': 'Document uploaded',
            'description': f"{d.get_document_type_display()} - {d.file_name}",
            'deviceName': d.device.name if d.device else d.device_name,
            'deviceCode': d.device.code if d.device else 'N/A',
            'userName': d.uploaded_by or 'System',
            'status': 'completed',
            'createdAt': d.created_at,
            'icon': 'upload_file',
        })
    activities.sort(key=lambda a: a['createdAt'], reverse=True)
    for a in activities:
        a['createdAt'] = a['createdAt'].isoformat()
    return activities[:limit]
