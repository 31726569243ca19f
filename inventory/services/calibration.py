"""
Calibration due-date sweep.

The sweep scans every device with a ``next_calibration_date`` and raises
notifications for three disjoint windows measured from the moment the
sweep starts:

* near-due: due now or within the next 7 days (inclusive)
* overdue: due before now
* advance: due more than 7 and at most 30 days from now

Each window has its own lookback period.  A notification with the same
device, type and title created inside that period suppresses a new one,
so running the sweep repeatedly is safe.  Once the period has elapsed
the device is reminded again even if its date has not changed.

Database failures end the current sweep and are logged; the next
scheduled run picks up where this one stopped.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional

from django.db import DatabaseError
from django.db.models import Q, QuerySet
from django.utils import timezone

from inventory.models import Device, Notification, NotificationType
from inventory.services.notifications import create_notification

logger = logging.getLogger('medtrack.calibration')

MS_PER_DAY = 24 * 60 * 60 * 1000
NEAR_DUE_DAYS = 7
ADVANCE_DAYS = 30
CRITICAL_DAYS = 3


@dataclass(frozen=True)
class ReminderRule:
    """Identity and lookback window of one kind of sweep notification."""
    title: str
    type: str
    lookback: timedelta


NEAR_DUE = ReminderRule('Calibration due soon', NotificationType.CALIBRATION, timedelta(hours=24))
OVERDUE = ReminderRule('Calibration overdue', NotificationType.ALERT, timedelta(hours=12))
ADVANCE = ReminderRule('Upcoming calibration', NotificationType.ADVANCE, timedelta(days=7))

CALIBRATION_COMPLETED_TITLE = 'Calibration completed'


@dataclass
class SweepResult:
    near_due: int = 0
    overdue: int = 0
    advance: int = 0
    skipped: int = 0
    failed: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def created(self) -> int:
        return self.near_due + self.overdue + self.advance


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from ``earlier`` to ``later``, rounded up at millisecond precision."""
    delta_ms = (later - earlier) // timedelta(milliseconds=1)
    return math.ceil(delta_ms / MS_PER_DAY)


def _iso_date(value: datetime) -> str:
    return value.astimezone(dt_timezone.utc).date().isoformat()


def _display_date(value: datetime) -> str:
    return timezone.localtime(value).strftime('%d/%m/%Y')


def near_due_devices(now: datetime) -> QuerySet[Device]:
    return Device.objects.filter(
        next_calibration_date__range=(now, now + timedelta(days=NEAR_DUE_DAYS)),
    )


def overdue_devices(now: datetime) -> QuerySet[Device]:
    return Device.objects.filter(next_calibration_date__lt=now)


def advance_devices(now: datetime) -> QuerySet[Device]:
    # Lower bound is exclusive: a device due at exactly now+7d is near-due.
    return Device.objects.filter(
        next_calibration_date__gt=now + timedelta(days=NEAR_DUE_DAYS),
        next_calibration_date__lte=now + timedelta(days=ADVANCE_DAYS),
    )


def already_notified(device: Device, rule: ReminderRule, now: datetime) -> bool:
    return Notification.objects.filter(
        device=device,
        type=rule.type,
        title=rule.title,
        created_at__gte=now - rule.lookback,
    ).exists()


def _notify_near_due(device: Device, now: datetime) -> Notification:
    due = device.next_calibration_date
    days_until = days_between(due, now)
    notification = create_notification(
        device=device,
        title=NEAR_DUE.title,
        message=f"{device.name} is due for calibration in {days_until} days ({_display_date(due)})",
        type=NEAR_DUE.type,
        priority=Notification.PRIORITY_HIGH if days_until <= CRITICAL_DAYS else Notification.PRIORITY_MEDIUM,
        due_date=due,
        is_read=False,
        metadata={
            'days_until': days_until,
            'calibration_date': _iso_date(due),
            'auto_generated': True,
        },
    )
    logger.info("Created calibration reminder for %s (%d days)", device.name, days_until)
    return notification


def _notify_overdue(device: Device, now: datetime) -> Notification:
    due = device.next_calibration_date
    days_overdue = days_between(now, due)
    notification = create_notification(
        device=device,
        title=OVERDUE.title,
        message=f"{device.name} is {days_overdue} days past its calibration date. Immediate action required!",
        type=OVERDUE.type,
        priority=Notification.PRIORITY_CRITICAL,
        due_date=due,
        is_read=False,
        metadata={
            'days_overdue': days_overdue,
            'overdue_since': _iso_date(due),
            'auto_generated': True,
            'urgency': 'critical',
        },
    )
    logger.warning("Created OVERDUE alert for %s (%d days overdue)", device.name, days_overdue)
    return notification


def _notify_advance(device: Device, now: datetime) -> Notification:
    due = device.next_calibration_date
    days_until = days_between(due, now)
    notification = create_notification(
        device=device,
        title=ADVANCE.title,
        message=f"{device.name} has a calibration scheduled in {days_until} days ({_display_date(due)})",
        type=ADVANCE.type,
        priority=Notification.PRIORITY_LOW,
        due_date=due,
        is_read=True,
        metadata={
            'days_until': days_until,
            'calibration_date': _iso_date(due),
            'auto_generated': True,
            'reminder_type': 'advance',
        },
    )
    logger.info("Created advance reminder for %s (%d days)", device.name, days_until)
    return notification


def check_calibration_due_dates(now: Optional[datetime] = None) -> SweepResult:
    """Run one sweep over all devices and return what it created."""
    now = now or timezone.now()
    result = SweepResult()
    try:
        near_due = list(near_due_devices(now))
        overdue = list(overdue_devices(now))
        advance = list(advance_devices(now))

        for device in near_due:
            if already_notified(device, NEAR_DUE, now):
                result.skipped += 1
                continue
            _notify_near_due(device, now)
            result.near_due += 1

        for device in overdue:
            if already_notified(device, OVERDUE, now):
                result.skipped += 1
                continue
            _notify_overdue(device, now)
            result.overdue += 1

        for device in advance:
            if already_notified(device, ADVANCE, now):
                result.skipped += 1
                continue
            _notify_advance(device, now)
            result.advance += 1
    except DatabaseError as exc:
        logger.exception("Error in calibration check: %s", exc)
        result.failed = True
        result.errors.append(str(exc))
    return result


def check_critical_calibration_alerts(now: Optional[datetime] = None) -> Optional[int]:
    """Count devices that are overdue or due within three days.

    Only the count is logged; no notifications are written.  Returns
    ``None`` when the query fails.
    """
    now = now or timezone.now()
    try:
        count = Device.objects.filter(
            Q(next_calibration_date__lt=now)
            | Q(next_calibration_date__range=(now, now + timedelta(days=CRITICAL_DAYS)))
        ).count()
    except DatabaseError as exc:
        logger.exception("Error in critical calibration check: %s", exc)
        return None
    if count:
        logger.warning("Found %d devices requiring urgent calibration attention", count)
    return count


def record_calibration(
    device: Device,
    next_calibration_date: datetime,
    *,
    calibration_by: str = '',
    notes: str = '',
) -> Notification:
    """Move a device's next calibration date after a completed calibration.

    Creates a pre-read informational notification and marks the device's
    unread overdue alerts as read.
    """
    old_date = device.next_calibration_date
    device.next_calibration_date = next_calibration_date
    device.save(update_fields=['next_calibration_date', 'updated_at'])

    notification = create_notification(
        device=device,
        title=CALIBRATION_COMPLETED_TITLE,
        message=(
            f"{device.name} calibration completed. "
            f"Next calibration due: {_display_date(next_calibration_date)}"
        ),
        type=NotificationType.INFO,
        priority=Notification.PRIORITY_LOW,
        due_date=next_calibration_date,
        is_read=True,
        metadata={
            'calibration_completed': True,
            'old_calibration_date': _iso_date(old_date) if old_date else None,
            'new_calibration_date': _iso_date(next_calibration_date),
            'calibration_by': calibration_by or 'Unknown',
            'notes': notes or '',
            'auto_generated': False,
        },
    )
    Notification.objects.filter(
        device=device,
        type=OVERDUE.type,
        title=OVERDUE.title,
        is_read=False,
    ).update(is_read=True, updated_at=timezone.now())
    logger.info("Calibration updated for %s: %s -> %s", device.name, old_date, next_calibration_date)
    return notification
