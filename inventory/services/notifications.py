from __future__ import annotations

from typing import Any, Dict, Optional

from inventory.models import Device, Notification


def create_notification(
    *,
    device: Device,
    title: str,
    message: str,
    type: str,
    priority: int = Notification.PRIORITY_MEDIUM,
    due_date=None,
    is_read: bool = False,
    metadata: Optional[Dict[str, Any]] = None,
) -> Notification:
    """Insert a notification with a snapshot of the device's name and code."""
    return Notification.objects.create(
        device=device,
        device_name=device.name,
        device_code=device.code,
        title=title,
        message=message,
        type=type,
        priority=priority,
        due_date=due_date,
        is_read=is_read,
        metadata=metadata or {},
    )


def serialize_notification(n: Notification, include_device: bool = True) -> dict:
    data = {
        'id': n.id,
        'title': n.title,
        'message': n.message,
        'type': n.type,
        'deviceId': n.device_id,
        'deviceName': n.device_name,
        'deviceCode': n.device_code,
        'priority': n.priority,
        'isRead': n.is_read,
        'dueDate': n.due_date.isoformat() if n.due_date else None,
        'createdAt': n.created_at.isoformat() if n.created_at else None,
        'updatedAt': n.updated_at.isoformat() if n.updated_at else None,
        'metadata': n.metadata,
    }
    if include_device:
        device = n.device
        data['device'] = {'id': device.id, 'name': device.name, 'code': device.code} if device else None
    return data
