from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from inventory.models import Device, Notification, NotificationType
from inventory.services.notifications import create_notification


class Command(BaseCommand):
    help = "Create sample near-due and overdue notifications for the first devices."

    def handle(self, *args, **opts):
        devices = list(Device.objects.order_by('id')[:3])
        if not devices:
            self.stdout.write(self.style.WARNING("No devices found; nothing to seed."))
            return
        first = devices[0]
        second = devices[1] if len(devices) > 1 else first
        now = timezone.now()
        samples = [
            dict(
                device=first,
                title='Calibration due soon',
                message=f"{first.name} is due for calibration in 7 days",
                type=NotificationType.CALIBRATION,
                priority=Notification.PRIORITY_HIGH,
                due_date=now + timedelta(days=7),
                metadata={'calibration_type': 'annual', 'auto_generated': False},
            ),
            dict(
                device=second,
                title='Calibration overdue',
                message=f"{second.name} is 3 days past its calibration date",
                type=NotificationType.ALERT,
                priority=Notification.PRIORITY_CRITICAL,
                due_date=now - timedelta(days=3),
                metadata={'days_overdue': 3, 'auto_generated': False},
            ),
        ]
        created = 0
        for data in samples:
            exists = Notification.objects.filter(
                title=data['title'],
                device=data['device'],
                type__in=[NotificationType.CALIBRATION, NotificationType.ALERT],
            ).exists()
            if exists:
                continue
            create_notification(**data)
            created += 1
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} notifications"))
