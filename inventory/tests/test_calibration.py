from datetime import timedelta, timezone as dt_timezone

import pytest
from django.db import DatabaseError
from django.utils import timezone

from inventory.models import Device, Notification, NotificationType
from inventory.services import calibration
from inventory.services.calibration import (
    check_calibration_due_dates,
    check_critical_calibration_alerts,
    days_between,
    record_calibration,
)

pytestmark = pytest.mark.django_db


def make_device(code, due, name=None):
    return Device.objects.create(code=code, name=name or f"Device {code}", next_calibration_date=due)


def test_days_between_rounds_up_partial_days():
    now = timezone.now()
    assert days_between(now + timedelta(days=5), now) == 5
    assert days_between(now + timedelta(days=4, hours=1), now) == 5
    assert days_between(now + timedelta(milliseconds=1), now) == 1
    assert days_between(now, now) == 0


def test_near_due_device_gets_high_priority_reminder():
    now = timezone.now()
    device = make_device('NEAR-1', now + timedelta(days=2))

    result = check_calibration_due_dates(now)

    assert result.near_due == 1
    n = Notification.objects.get(device=device)
    assert n.type == NotificationType.CALIBRATION
    assert n.title == calibration.NEAR_DUE.title
    assert n.priority == Notification.PRIORITY_HIGH
    assert n.is_read is False
    assert n.metadata['days_until'] == 2
    assert n.metadata['auto_generated'] is True
    assert n.device_name == device.name
    assert n.device_code == 'NEAR-1'


def test_near_due_five_days_out_is_medium_priority():
    now = timezone.now()
    device = make_device('NEAR-5', now + timedelta(days=5))

    check_calibration_due_dates(now)

    n = Notification.objects.get(device=device)
    assert n.priority == Notification.PRIORITY_MEDIUM
    assert n.metadata['days_until'] == 5
    assert n.metadata['calibration_date'] == (now + timedelta(days=5)).astimezone(dt_timezone.utc).date().isoformat()


def test_overdue_device_gets_critical_alert():
    now = timezone.now()
    device = make_device('OVER-3', now - timedelta(days=3))

    result = check_calibration_due_dates(now)

    assert result.overdue == 1
    n = Notification.objects.get(device=device)
    assert n.type == NotificationType.ALERT
    assert n.priority == Notification.PRIORITY_CRITICAL
    assert n.is_read is False
    assert n.metadata['days_overdue'] == 3
    assert n.metadata['urgency'] == 'critical'
    assert 'overdue_since' in n.metadata


def test_advance_reminder_is_low_priority_and_pre_read():
    now = timezone.now()
    device = make_device('ADV-20', now + timedelta(days=20))

    result = check_calibration_due_dates(now)

    assert result.advance == 1
    n = Notification.objects.get(device=device)
    assert n.type == NotificationType.ADVANCE
    assert n.priority == Notification.PRIORITY_LOW
    assert n.is_read is True
    assert n.metadata['reminder_type'] == 'advance'
    assert n.metadata['days_until'] == 20


def test_exactly_seven_days_is_near_due_not_advance():
    now = timezone.now()
    device = make_device('EDGE-7', now + timedelta(days=7))

    result = check_calibration_due_dates(now)

    assert (result.near_due, result.advance) == (1, 0)
    n = Notification.objects.get(device=device)
    assert n.type == NotificationType.CALIBRATION
    assert n.metadata['days_until'] == 7


def test_devices_outside_every_window_are_ignored():
    now = timezone.now()
    Device.objects.create(code='NONE', name='Unscheduled')
    make_device('FAR', now + timedelta(days=31))

    result = check_calibration_due_dates(now)

    assert result.created == 0
    assert Notification.objects.count() == 0


def test_second_sweep_creates_no_duplicates():
    now = timezone.now()
    make_device('A', now + timedelta(days=1))
    make_device('B', now - timedelta(days=1))
    make_device('C', now + timedelta(days=15))

    first = check_calibration_due_dates(now)
    second = check_calibration_due_dates(now + timedelta(minutes=5))

    assert first.created == 3
    assert second.created == 0
    assert second.skipped == 3
    assert Notification.objects.count() == 3


def test_reminder_is_repeated_once_lookback_has_elapsed():
    now = timezone.now()
    device = make_device('REPEAT', now - timedelta(days=2))
    check_calibration_due_dates(now)
    # Overdue alerts look back 12 hours
    Notification.objects.filter(device=device).update(created_at=now - timedelta(hours=13))

    result = check_calibration_due_dates(now)

    assert result.overdue == 1
    assert Notification.objects.filter(device=device, type=NotificationType.ALERT).count() == 2


def test_manual_notification_with_other_title_does_not_suppress():
    now = timezone.now()
    device = make_device('MANUAL', now + timedelta(days=3))
    Notification.objects.create(
        device=device, device_name=device.name, device_code=device.code,
        title='Check probe', message='manual', type=NotificationType.CALIBRATION,
    )

    result = check_calibration_due_dates(now)

    assert result.near_due == 1


def test_database_error_ends_sweep_without_raising(monkeypatch):
    def boom(now):
        raise DatabaseError('connection lost')

    monkeypatch.setattr(calibration, 'near_due_devices', boom)

    result = check_calibration_due_dates()

    assert result.failed is True
    assert result.errors == ['connection lost']
    assert result.created == 0


def test_critical_check_counts_overdue_and_three_day_devices():
    now = timezone.now()
    make_device('C1', now - timedelta(days=1))
    make_device('C2', now + timedelta(days=2))
    make_device('C3', now + timedelta(days=5))

    assert check_critical_calibration_alerts(now) == 2
    assert Notification.objects.count() == 0


def test_record_calibration_moves_date_and_clears_overdue_alerts():
    now = timezone.now()
    device = make_device('CAL', now - timedelta(days=4))
    check_calibration_due_dates(now)
    assert Notification.objects.filter(device=device, is_read=False).count() == 1

    new_date = now + timedelta(days=365)
    info = record_calibration(device, new_date, calibration_by='Tech A', notes='ok')

    device.refresh_from_db()
    assert device.next_calibration_date == new_date
    assert info.type == NotificationType.INFO
    assert info.is_read is True
    assert info.metadata['calibration_completed'] is True
    assert info.metadata['calibration_by'] == 'Tech A'
    assert info.metadata['auto_generated'] is False
    assert Notification.objects.filter(device=device, type=NotificationType.ALERT, is_read=False).count() == 0


def test_record_calibration_defaults_calibrated_by_to_unknown():
    device = make_device('CAL2', None)

    info = record_calibration(device, timezone.now() + timedelta(days=180))

    assert info.metadata['calibration_by'] == 'Unknown'
    assert info.metadata['old_calibration_date'] is None


def test_near_due_lookback_is_twenty_four_hours():
    now = timezone.now()
    device = make_device('LOOK-24', now + timedelta(days=2))
    check_calibration_due_dates(now)

    Notification.objects.filter(device=device).update(created_at=now - timedelta(hours=23))
    assert check_calibration_due_dates(now).near_due == 0

    Notification.objects.filter(device=device).update(created_at=now - timedelta(hours=25))
    assert check_calibration_due_dates(now).near_due == 1
    assert Notification.objects.filter(device=device, type=NotificationType.CALIBRATION).count() == 2


def test_advance_lookback_is_seven_days():
    now = timezone.now()
    device = make_device('LOOK-7D', now + timedelta(days=20))
    check_calibration_due_dates(now)

    Notification.objects.filter(device=device).update(created_at=now - timedelta(days=6))
    assert check_calibration_due_dates(now).advance == 0

    Notification.objects.filter(device=device).update(created_at=now - timedelta(days=8))
    assert check_calibration_due_dates(now).advance == 1
    assert Notification.objects.filter(device=device, type=NotificationType.ADVANCE).count() == 2


def test_priority_edge_at_three_days():
    now = timezone.now()
    at_edge = make_device('EDGE-3', now + timedelta(days=3))
    past_edge = make_device('EDGE-3+', now + timedelta(days=3, milliseconds=1))

    check_calibration_due_dates(now)

    n = Notification.objects.get(device=at_edge)
    assert (n.priority, n.metadata['days_until']) == (Notification.PRIORITY_HIGH, 3)
    n = Notification.objects.get(device=past_edge)
    assert (n.priority, n.metadata['days_until']) == (Notification.PRIORITY_MEDIUM, 4)


def test_window_bounds_are_inclusive():
    now = timezone.now()
    due_now = make_device('NOW', now)
    due_in_30 = make_device('EDGE-30', now + timedelta(days=30))

    result = check_calibration_due_dates(now)

    assert (result.near_due, result.overdue, result.advance) == (1, 0, 1)
    n = Notification.objects.get(device=due_now)
    assert n.type == NotificationType.CALIBRATION
    assert n.metadata['days_until'] == 0
    assert n.priority == Notification.PRIORITY_HIGH
    assert Notification.objects.get(device=due_in_30).type == NotificationType.ADVANCE


def test_insert_failure_ends_sweep(monkeypatch):
    now = timezone.now()
    make_device('INS-1', now + timedelta(days=1))
    make_device('INS-2', now - timedelta(days=1))

    def failing_insert(**kwargs):
        raise DatabaseError('insert failed')

    monkeypatch.setattr(calibration, 'create_notification', failing_insert)

    result = check_calibration_due_dates(now)

    assert result.failed is True
    assert result.errors == ['insert failed']
    assert result.created == 0
    assert Notification.objects.count() == 0
