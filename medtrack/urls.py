"""
URL configuration for the medtrack project.

The `urlpatterns` list routes URLs to views.  This module includes
the Django admin, the API routes provided by the inventory app and the
uploaded files directory.  OpenAPI documentation is exposed at
``/swagger/`` and ``/redoc/``.
"""
from django.conf import settings
from django.contrib import admin
from django.urls import path, include, re_path
from django.views.static import serve

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Medical Device API",
    default_version='v1',
    description="Inventory, calibration and fault-report services for hospital medical devices.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('inventory.routers')),
    # Uploaded documents, attachments and report images
    re_path(r'^uploads/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
