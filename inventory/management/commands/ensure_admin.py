from django.conf import settings
from django.core.management.base import BaseCommand

from inventory.models import User


class Command(BaseCommand):
    help = "Ensure the default administrator account exists (idempotent)."

    def handle(self, *args, **opts):
        email = settings.DEFAULT_ADMIN_EMAIL
        if User.objects.filter(email__iexact=email).exists():
            self.stdout.write(f"exists: {email}")
            return
        User.objects.create_user(
            username=email,
            email=email,
            password=settings.DEFAULT_ADMIN_PASSWORD,
            name='Administrator',
            role=User.ROLE_ADMIN,
            status=User.STATUS_ACTIVE,
        )
        self.stdout.write(self.style.SUCCESS(f"created: {email}"))
