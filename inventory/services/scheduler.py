"""
In-process scheduler for the calibration notification jobs.

Three jobs run on fixed wall-clock schedules in the project's time zone:

* ``daily``: the full calibration sweep, every day at ``daily_hour``
* ``critical``: the urgent-device count, at every hour divisible by
  ``critical_interval_hours``
* ``reset``: clears the in-memory critical counter at midnight

Jobs run one at a time on the calling thread, so a slow sweep delays the
next job rather than overlapping with it.  An exception in one job is
logged and does not stop the loop.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from django.utils import timezone

from inventory.services.calibration import (
    SweepResult,
    check_calibration_due_dates,
    check_critical_calibration_alerts,
)

logger = logging.getLogger('medtrack.calibration')


def daily_at(hour: int, minute: int = 0) -> Callable[[datetime], datetime]:
    """Return a function giving the first ``hour:minute`` strictly after ``now``."""
    def next_run(now: datetime) -> datetime:
        local = timezone.localtime(now)
        candidate = local.replace(hour=hour, minute=minute, second=0, microsecond=0)
        if candidate <= local:
            candidate += timedelta(days=1)
        return candidate
    return next_run


def every_hours(interval: int) -> Callable[[datetime], datetime]:
    """Return a function giving the next top of an hour divisible by ``interval``."""
    if interval < 1 or 24 % interval:
        raise ValueError("interval must divide 24")

    def next_run(now: datetime) -> datetime:
        local = timezone.localtime(now)
        candidate = local.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        while candidate.hour % interval:
            candidate += timedelta(hours=1)
        return candidate
    return next_run


@dataclass
class ScheduledJob:
    name: str
    next_run: Callable[[datetime], datetime]
    func: Callable[[], object]


class CalibrationScheduler:
    def __init__(
        self,
        daily_hour: int = 6,
        critical_interval_hours: int = 6,
        clock: Callable[[], datetime] = timezone.now,
        sleep: Callable[[float], None] = time.sleep,
        max_sleep: float = 60.0,
    ) -> None:
        self.clock = clock
        self.sleep = sleep
        # Upper bound on one nap so stop() is noticed promptly
        self.max_sleep = max_sleep
        self.critical_alert_count = 0
        self.last_critical_check = clock()
        self.jobs: List[ScheduledJob] = [
            ScheduledJob('daily', daily_at(daily_hour), self.run_daily_check),
            ScheduledJob('critical', every_hours(critical_interval_hours), self.run_critical_check),
            ScheduledJob('reset', daily_at(0), self.reset_critical_counter),
        ]
        self.due: Dict[str, datetime] = {}
        self._stopped = False

    def run_daily_check(self) -> SweepResult:
        logger.info("Running daily calibration check...")
        result = check_calibration_due_dates()
        logger.info(
            "Calibration check done: %d near-due, %d overdue, %d advance, %d suppressed",
            result.near_due, result.overdue, result.advance, result.skipped,
        )
        return result

    def run_critical_check(self) -> Optional[int]:
        logger.info("Running critical calibration check...")
        count = check_critical_calibration_alerts()
        if count:
            self.critical_alert_count += count
        self.last_critical_check = self.clock()
        return count

    def reset_critical_counter(self) -> None:
        self.critical_alert_count = 0
        self.last_critical_check = self.clock()
        logger.info("Reset critical alert counter")

    def schedule(self, now: datetime) -> None:
        for job in self.jobs:
            self.due[job.name] = job.next_run(now)

    def run_pending(self, now: datetime) -> List[str]:
        """Run every job due at or before ``now`` and reschedule it."""
        ran: List[str] = []
        for job in self.jobs:
            due = self.due.get(job.name)
            if due is None or due > now:
                continue
            try:
                job.func()
            except Exception:
                logger.exception("Scheduled job %s failed", job.name)
            ran.append(job.name)
            self.due[job.name] = job.next_run(now)
        return ran

    def stop(self) -> None:
        self._stopped = True

    def run_forever(self, run_initial: bool = True, max_iterations: Optional[int] = None) -> None:
        if run_initial:
            try:
                self.run_daily_check()
            except Exception:
                logger.exception("Initial calibration check failed")
        self.schedule(self.clock())
        for name, due in sorted(self.due.items(), key=lambda kv: kv[1]):
            logger.info("Next %s job at %s", name, due.isoformat())

        iterations = 0
        while not self._stopped:
            if max_iterations is not None and iterations >= max_iterations:
                break
            iterations += 1
            wake_at = min(self.due.values())
            delay = (wake_at - self.clock()).total_seconds()
            if delay > 0:
                self.sleep(min(delay, self.max_sleep))
            self.run_pending(self.clock())
