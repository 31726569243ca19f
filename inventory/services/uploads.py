"""
File-system storage for uploaded binaries.

Each upload category has its own directory under ``MEDIA_ROOT`` and its
own list of accepted MIME types.  Stored names are prefixed with a
millisecond timestamp and have whitespace replaced by underscores.
Paths recorded in the database are relative to the project root, e.g.
``uploads/documents/1700000000000_manual.pdf``.
"""
from __future__ import annotations

import logging
import os
import re
import time
from dataclasses import dataclass

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from rest_framework.exceptions import ValidationError

logger = logging.getLogger('medtrack.uploads')

UPLOAD_PREFIX = 'uploads'

PDF_TYPES = ('application/pdf',)
IMAGE_TYPES = ('image/png', 'image/jpeg', 'image/jpg')
ATTACHMENT_TYPES = PDF_TYPES + IMAGE_TYPES + (
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
)


@dataclass(frozen=True)
class UploadCategory:
    directory: str
    allowed_types: tuple
    error_message: str


DOCUMENTS = UploadCategory('documents', PDF_TYPES, 'Only PDF allowed')
REPORT_IMAGES = UploadCategory('reports', IMAGE_TYPES, 'Only PNG/JPG allowed')
ATTACHMENTS = UploadCategory('attachments', ATTACHMENT_TYPES, 'File type not allowed')


@dataclass(frozen=True)
class StoredFile:
    original_name: str
    path: str
    size: int
    content_type: str


def safe_filename(original_name: str) -> str:
    base = re.sub(r"\s+", "_", os.path.basename(original_name or "file"))
    return f"{int(time.time() * 1000)}_{base}"


def validate_upload(file: UploadedFile, category: UploadCategory) -> None:
    content_type = getattr(file, 'content_type', '') or ''
    if content_type not in category.allowed_types:
        raise ValidationError({'file': category.error_message})
    max_bytes = settings.UPLOAD_MAX_MB * 1024 * 1024
    if file.size and file.size > max_bytes:
        raise ValidationError({'file': f'File too large. Maximum size: {settings.UPLOAD_MAX_MB}MB'})


def store_upload(file: UploadedFile, category: UploadCategory) -> StoredFile:
    """Validate ``file`` and write it into the category directory."""
    validate_upload(file, category)
    name = default_storage.save(f"{category.directory}/{safe_filename(file.name)}", file)
    logger.info("Stored %s upload %s (%s bytes)", category.directory, name, file.size)
    return StoredFile(
        original_name=file.name,
        path=f"{UPLOAD_PREFIX}/{name}",
        size=file.size or 0,
        content_type=file.content_type,
    )


def storage_name(path: str) -> str:
    """Strip the ``uploads/`` prefix to get the name inside ``MEDIA_ROOT``."""
    prefix = f"{UPLOAD_PREFIX}/"
    return path[len(prefix):] if path.startswith(prefix) else path


def delete_upload(path: str) -> bool:
    name = storage_name(path)
    if default_storage.exists(name):
        default_storage.delete(name)
        logger.info("Deleted upload %s", name)
        return True
    return False
