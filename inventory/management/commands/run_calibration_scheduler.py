import logging
import signal

from django.conf import settings
from django.core.management.base import BaseCommand

from inventory.services.scheduler import CalibrationScheduler

logger = logging.getLogger('medtrack.calibration')


class Command(BaseCommand):
    help = (
        "Run the calibration notification scheduler: a sweep on start-up, "
        "the daily sweep, the periodic critical check and the midnight reset."
    )

    def add_arguments(self, parser):
        parser.add_argument('--once', action='store_true', help='Run a single sweep and exit')
        parser.add_argument('--skip-initial', action='store_true', help='Do not sweep on start-up')

    def handle(self, *args, **opts):
        scheduler = CalibrationScheduler(
            daily_hour=settings.CALIBRATION_DAILY_HOUR,
            critical_interval_hours=settings.CALIBRATION_CRITICAL_INTERVAL_HOURS,
        )
        if opts['once']:
            result = scheduler.run_daily_check()
            self.stdout.write(self.style.SUCCESS(f"Created {result.created} notifications"))
            return

        def _stop(signum, frame):
            logger.info("Received signal %s, stopping scheduler", signum)
            scheduler.stop()

        signal.signal(signal.SIGTERM, _stop)
        logger.info("Starting calibration notification scheduler")
        try:
            scheduler.run_forever(run_initial=not opts['skip_initial'])
        except KeyboardInterrupt:
            logger.info("Scheduler interrupted")
