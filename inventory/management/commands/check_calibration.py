from django.core.management.base import BaseCommand, CommandError

from inventory.services.calibration import check_calibration_due_dates, check_critical_calibration_alerts


class Command(BaseCommand):
    help = "Run one calibration due-date sweep (or only the critical count with --critical)."

    def add_arguments(self, parser):
        parser.add_argument('--critical', action='store_true', help='Only count urgent devices')

    def handle(self, *args, **opts):
        if opts['critical']:
            count = check_critical_calibration_alerts()
            if count is None:
                raise CommandError("Critical calibration check failed")
            self.stdout.write(f"{count} devices require urgent calibration attention")
            return
        result = check_calibration_due_dates()
        if result.failed:
            raise CommandError(f"Calibration check failed: {'; '.join(result.errors)}")
        self.stdout.write(self.style.SUCCESS(
            f"Created {result.created} notifications "
            f"(near-due={result.near_due} overdue={result.overdue} advance={result.advance} "
            f"suppressed={result.skipped})"
        ))
