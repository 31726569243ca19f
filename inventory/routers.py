"""
URL mappings for the medical device API.

Paths carry no trailing slash to match the front-end.  Literal segments
(``documents/types``, ``notifications/read-all``) are listed before the
parameterised routes that would otherwise shadow them.
"""
from django.urls import include, path

from .auth_views import (
    change_password_view,
    jwt_refresh_view,
    login_view,
    profile_view,
    register_view,
    reset_password_view,
)
from .views import health
from .views.attachments import attachment_detail, device_attachments
from .views.dashboard import dashboard_overview, dashboard_recent_activities, dashboard_report_trends
from .views.devices import device_calibration, device_detail, device_qrcode, devices_list
from .views.documents import (
    device_documents,
    document_detail,
    document_download,
    document_types,
    documents_list,
)
from .views.notifications import (
    notification_detail,
    notification_read,
    notifications_list,
    notifications_read_all,
)
from .views.reports import create_report, device_reports, report_status, reports_list
from .views.users import user_detail, user_status, users_list


urlpatterns = [
    path('', health.index, name='index'),
    path('healthz', health.healthz, name='healthz'),
    path('', include('django_prometheus.urls')),

    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh'),
    path('api/auth/profile', profile_view, name='profile'),
    path('api/auth/change-password', change_password_view, name='change_password'),
    path('api/auth/register', register_view, name='register'),
    path('api/auth/reset-password', reset_password_view, name='reset_password'),

    # Users (admin)
    path('api/users', users_list, name='users'),
    path('api/users/<int:pk>', user_detail, name='user_detail'),
    path('api/users/<int:pk>/status', user_status, name='user_status'),

    # Devices
    path('api/devices', devices_list, name='devices'),
    path('api/devices/<int:pk>', device_detail, name='device_detail'),
    path('api/devices/<int:pk>/calibration', device_calibration, name='device_calibration'),
    path('api/devices/<int:pk>/qrcode', device_qrcode, name='device_qrcode'),
    path('api/devices/<int:pk>/documents', device_documents, name='device_documents'),
    path('api/devices/<int:pk>/attachments', device_attachments, name='device_attachments'),
    path('api/devices/<int:pk>/report', create_report, name='device_report_create'),
    path('api/devices/<int:pk>/reports', device_reports, name='device_reports'),

    # Documents
    path('api/documents', documents_list, name='documents'),
    path('api/documents/types', document_types, name='document_types'),
    path('api/documents/<str:doc_id>', document_detail, name='document_detail'),
    path('api/documents/<str:doc_id>/download', document_download, name='document_download'),

    # Attachments
    path('api/attachments/<int:pk>', attachment_detail, name='attachment_detail'),

    # Reports
    path('api/reports', reports_list, name='reports'),
    path('api/reports/<int:pk>/status', report_status, name='report_status'),

    # Notifications
    path('api/notifications', notifications_list, name='notifications'),
    path('api/notifications/read-all', notifications_read_all, name='notifications_read_all'),
    path('api/notifications/<int:pk>', notification_detail, name='notification_detail'),
    path('api/notifications/<int:pk>/read', notification_read, name='notification_read'),

    # Dashboard
    path('api/dashboard/overview', dashboard_overview, name='dashboard_overview'),
    path('api/dashboard/report-trends', dashboard_report_trends, name='dashboard_report_trends'),
    path('api/dashboard/recent-activities', dashboard_recent_activities, name='dashboard_recent_activities'),
]
