from datetime import datetime, timedelta

import pytest
from django.utils import timezone

from inventory.services.scheduler import CalibrationScheduler, daily_at, every_hours


def local(*args):
    return timezone.make_aware(datetime(*args))


class FakeClock:
    def __init__(self, start):
        self.now = start
        self.naps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.naps.append(seconds)
        self.now += timedelta(seconds=seconds)


def make_scheduler(clock, **kwargs):
    scheduler = CalibrationScheduler(clock=clock, sleep=clock.sleep, **kwargs)
    calls = []
    for job in scheduler.jobs:
        job.func = (lambda name: lambda: calls.append(name))(job.name)
    return scheduler, calls


def test_daily_at_picks_today_or_tomorrow():
    nxt = daily_at(6)
    assert nxt(local(2024, 3, 1, 5, 30)) == local(2024, 3, 1, 6, 0)
    assert nxt(local(2024, 3, 1, 6, 0)) == local(2024, 3, 2, 6, 0)
    assert nxt(local(2024, 3, 1, 23, 59)) == local(2024, 3, 2, 6, 0)


def test_every_hours_lands_on_divisible_hours():
    nxt = every_hours(6)
    assert nxt(local(2024, 3, 1, 5, 30)) == local(2024, 3, 1, 6, 0)
    assert nxt(local(2024, 3, 1, 6, 0)) == local(2024, 3, 1, 12, 0)
    assert nxt(local(2024, 3, 1, 19, 1)) == local(2024, 3, 2, 0, 0)


def test_every_hours_rejects_interval_not_dividing_a_day():
    with pytest.raises(ValueError):
        every_hours(5)


def test_run_pending_runs_only_due_jobs():
    clock = FakeClock(local(2024, 3, 1, 5, 0))
    scheduler, calls = make_scheduler(clock)
    scheduler.schedule(clock())

    assert scheduler.run_pending(local(2024, 3, 1, 5, 59)) == []
    assert scheduler.run_pending(local(2024, 3, 1, 6, 0)) == ['daily', 'critical']
    assert calls == ['daily', 'critical']
    assert scheduler.due['daily'] == local(2024, 3, 2, 6, 0)
    assert scheduler.due['critical'] == local(2024, 3, 1, 12, 0)


def test_failing_job_does_not_stop_others():
    clock = FakeClock(local(2024, 3, 1, 23, 0))
    scheduler, calls = make_scheduler(clock)

    def broken():
        raise RuntimeError('boom')

    scheduler.jobs[1].func = broken
    scheduler.schedule(clock())

    ran = scheduler.run_pending(local(2024, 3, 2, 0, 0))

    assert ran == ['critical', 'reset']
    assert calls == ['reset']
    assert scheduler.due['critical'] == local(2024, 3, 2, 6, 0)


def test_run_forever_sleeps_until_next_job():
    clock = FakeClock(local(2024, 3, 1, 5, 58))
    scheduler, calls = make_scheduler(clock)

    scheduler.run_forever(run_initial=False, max_iterations=2)

    assert calls == ['daily', 'critical']
    assert clock.naps == [60.0, 60.0]


def test_run_forever_naps_are_capped():
    clock = FakeClock(local(2024, 3, 1, 1, 0))
    scheduler, calls = make_scheduler(clock, max_sleep=600)

    scheduler.run_forever(run_initial=False, max_iterations=3)

    assert clock.naps == [600, 600, 600]
    assert calls == []


def test_stop_ends_loop():
    clock = FakeClock(local(2024, 3, 1, 1, 0))
    scheduler, _ = make_scheduler(clock)
    scheduler.stop()

    scheduler.run_forever(run_initial=False)

    assert clock.naps == []


@pytest.mark.django_db
def test_critical_counter_accumulates_and_resets():
    from inventory.models import Device

    now = timezone.now()
    Device.objects.create(code='X1', name='Pump', next_calibration_date=now - timedelta(days=1))
    scheduler = CalibrationScheduler()

    scheduler.run_critical_check()
    scheduler.run_critical_check()
    assert scheduler.critical_alert_count == 2

    scheduler.reset_critical_counter()
    assert scheduler.critical_alert_count == 0


@pytest.mark.django_db
def test_initial_sweep_runs_before_loop():
    from inventory.models import Device, Notification

    now = timezone.now()
    Device.objects.create(code='X2', name='Monitor', next_calibration_date=now + timedelta(days=2))
    scheduler = CalibrationScheduler()
    scheduler.stop()

    scheduler.run_forever(run_initial=True)

    assert Notification.objects.filter(device__code='X2').count() == 1
