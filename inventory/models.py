"""
Database models for the medical device inventory.

These models capture users, devices, their calibration and maintenance
documents, general file attachments, user-submitted fault reports and
the notifications raised about upcoming or overdue calibrations.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class User(AbstractUser):
    """Staff account identified by e-mail address.

    ``role`` gates access to administrative endpoints; ``status`` lets an
    administrator suspend an account without deleting it.
    """
    ROLE_ADMIN = 'admin'
    ROLE_USER = 'user'
    ROLE_STAFF = 'staff'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_USER, 'User'),
        (ROLE_STAFF, 'Staff'),
    ]
    STATUS_ACTIVE = 'active'
    STATUS_SUSPENDED = 'suspended'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_SUSPENDED, 'Suspended'),
    ]

    email = models.EmailField(max_length=100, unique=True)
    name = models.CharField(max_length=100)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER, db_index=True)
    department = models.CharField(max_length=100, blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username', 'name']

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.ROLE_ADMIN


class Device(models.Model):
    STATUS_CHOICES = [
        ('ready', 'Ready'),
        ('maintenance', 'Maintenance'),
        ('broken', 'Broken'),
        ('retired', 'Retired'),
    ]

    code = models.CharField(max_length=100, unique=True)
    name = models.CharField(max_length=255)
    specification = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='ready', db_index=True)
    calibration_date = models.DateTimeField(blank=True, null=True)
    # Scanned by the calibration sweep; null means "never scheduled".
    next_calibration_date = models.DateTimeField(blank=True, null=True, db_index=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    serial_number = models.CharField(max_length=100, blank=True, null=True)
    category = models.CharField(max_length=100, blank=True, null=True)
    price = models.DecimalField(max_digits=15, decimal_places=2, blank=True, null=True)
    supplier_company = models.CharField(max_length=255, blank=True, null=True)
    purchaser_department = models.CharField(max_length=255, blank=True, null=True)
    image_url = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class Document(models.Model):
    """A calibration certificate, repair report, manual or inspection log.

    Documents are URL based: ``document_url`` either points into the
    uploads directory or at an external location supplied by the client.
    ``device_name`` is stored alongside the optional device link so that
    URL-only documents can be filed against a device by name.
    """
    TYPE_CALIBRATION_CERTIFICATE = 'calibration_certificate'
    TYPE_REPAIR_REPORT = 'repair_report'
    TYPE_USER_MANUAL = 'user_manual'
    TYPE_DAILY_INSPECTION = 'daily_inspection'
    TYPE_CHOICES = [
        (TYPE_CALIBRATION_CERTIFICATE, 'Calibration certificate'),
        (TYPE_REPAIR_REPORT, 'Repair report'),
        (TYPE_USER_MANUAL, 'User manual'),
        (TYPE_DAILY_INSPECTION, 'Daily inspection log'),
    ]

    id = models.CharField(max_length=50, primary_key=True)
    device = models.ForeignKey(
        Device, null=True, blank=True, on_delete=models.SET_NULL, related_name='documents'
    )
    user = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='documents'
    )
    device_name = models.CharField(max_length=255)
    document_type = models.CharField(max_length=40, choices=TYPE_CHOICES)
    file_name = models.CharField(max_length=255)
    document_url = models.TextField()
    file_size = models.CharField(max_length=50, blank=True, null=True)
    uploaded_by = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.id} {self.file_name}"


class Attachment(models.Model):
    CATEGORY_CHOICES = [
        ('manual', 'Manual'),
        ('certificate', 'Certificate'),
        ('report', 'Report'),
        ('image', 'Image'),
        ('other', 'Other'),
    ]

    device = models.ForeignKey(Device, on_delete=models.CASCADE, related_name='attachments')
    file_name = models.CharField(max_length=255)
    file_path = models.CharField(max_length=255)
    file_size = models.PositiveIntegerField(blank=True, null=True)
    file_type = models.CharField(max_length=100, blank=True, null=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default='other')
    description = models.TextField(blank=True, null=True)
    uploaded_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='attachments'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.file_name} -> {self.device_id}"


class Report(models.Model):
    """A fault or problem report filed by a user against a device."""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in_progress', 'In progress'),
        ('resolved', 'Resolved'),
    ]

    device = models.ForeignKey(Device, on_delete=models.CASCADE, related_name='reports')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reports')
    message = models.TextField()
    image_path = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Report {self.id} on {self.device_id} ({self.status})"


class NotificationType(models.TextChoices):
    CALIBRATION = 'calibration', 'Calibration reminder'
    ALERT = 'alert', 'Overdue alert'
    ADVANCE = 'advance', 'Advance reminder'
    MAINTENANCE = 'maintenance', 'Maintenance'
    EXPIRY = 'expiry', 'Expiry'
    INFO = 'info', 'Information'


class Notification(models.Model):
    """A due-date notification about a device.

    ``device_name`` and ``device_code`` are a snapshot taken when the row
    is created; they are not refreshed if the device is renamed later.
    Priority runs from 1 (low) to 4 (critical).
    """
    PRIORITY_LOW = 1
    PRIORITY_MEDIUM = 2
    PRIORITY_HIGH = 3
    PRIORITY_CRITICAL = 4

    title = models.CharField(max_length=255)
    message = models.TextField()
    type = models.CharField(max_length=20, choices=NotificationType.choices, default=NotificationType.INFO)
    device = models.ForeignKey(Device, on_delete=models.CASCADE, related_name='notifications')
    device_name = models.CharField(max_length=255)
    device_code = models.CharField(max_length=100)
    priority = models.PositiveSmallIntegerField(
        default=PRIORITY_MEDIUM,
        validators=[MinValueValidator(PRIORITY_LOW), MaxValueValidator(PRIORITY_CRITICAL)],
    )
    due_date = models.DateTimeField(blank=True, null=True)
    is_read = models.BooleanField(default=False, db_index=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['device', 'type', 'title', 'created_at'], name='notif_dedup_idx'),
            models.Index(fields=['priority', 'created_at'], name='notif_priority_created_idx'),
        ]

    def __str__(self) -> str:
        return f"[{self.type}/{self.priority}] {self.title} ({self.device_code})"
