"""
Django admin registrations for the inventory models.

Lets superusers inspect devices, documents, reports and notifications
via the ``/admin/`` URL.  Only light configuration is applied.
"""

from django.contrib import admin

from .models import Attachment, Device, Document, Notification, Report, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'department', 'status', 'created_at')
    list_filter = ('role', 'status')
    search_fields = ('email', 'name', 'department')


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'status', 'location', 'next_calibration_date')
    list_filter = ('status', 'category')
    search_fields = ('code', 'name', 'serial_number', 'location')


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ('id', 'device_name', 'document_type', 'file_name', 'created_at')
    list_filter = ('document_type',)
    search_fields = ('id', 'device_name', 'file_name')


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'device', 'file_name', 'category', 'created_at')
    list_filter = ('category',)


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'device', 'user', 'status', 'created_at')
    list_filter = ('status',)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'type', 'device_code', 'priority', 'is_read', 'created_at')
    list_filter = ('type', 'priority', 'is_read')
    search_fields = ('title', 'device_name', 'device_code')
