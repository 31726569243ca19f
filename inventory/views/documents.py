"""
Device document views.

Documents are either PDFs uploaded against a device (stored under
``uploads/documents/``) or URL-only records created by the client.
Both kinds share the ``DOC-NNNNNN`` identifier format.
"""
from __future__ import annotations

import logging
import random

from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import default_storage
from django.db.models import Q
from django.http import FileResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Device, Document
from ..permissions import IsAdminOrReadOnly
from ..serializers.document import (
    DocumentCreateSerializer,
    DocumentListQuerySerializer,
    DocumentUpdateSerializer,
    DocumentUploadSerializer,
    resolve_document_type,
)
from ..services.uploads import DOCUMENTS, UPLOAD_PREFIX, delete_upload, storage_name, store_upload
from .common import get_device

logger = logging.getLogger('medtrack.uploads')

DOCUMENT_TYPES = [{'value': key, 'label': label} for key, label in Document.TYPE_CHOICES]


def _new_document_id() -> str:
    while True:
        doc_id = f"DOC-{random.randint(100000, 999999)}"
        if not Document.objects.filter(pk=doc_id).exists():
            return doc_id


def _get_document(pk: str) -> Document:
    doc = Document.objects.select_related('user', 'device').filter(pk=pk).first()
    if doc is None:
        raise NotFound('Document not found')
    return doc


def _is_stored_upload(url: str) -> bool:
    return bool(url) and url.startswith(f"{UPLOAD_PREFIX}/")


def serialize_document(doc: Document) -> dict:
    user = doc.user
    device = doc.device
    return {
        'id': doc.id,
        'deviceId': doc.device_id,
        'deviceName': doc.device_name,
        'documentType': doc.document_type,
        'documentTypeLabel': doc.get_document_type_display(),
        'fileName': doc.file_name,
        'documentUrl': doc.document_url,
        'fileSize': doc.file_size,
        'uploadedBy': doc.uploaded_by,
        'uploadedAt': doc.created_at.isoformat() if doc.created_at else None,
        'updatedAt': doc.updated_at.isoformat() if doc.updated_at else None,
        'user': {'id': user.id, 'name': user.name, 'email': user.email} if user else None,
        'device': {'id': device.id, 'name': device.name, 'code': device.code} if device else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def device_documents(request, pk: int):
    """List a device's documents, or upload a PDF (administrators only)."""
    device = get_device(pk)
    if request.method == 'GET':
        docs = device.documents.select_related('user').order_by('-created_at')
        return Response([serialize_document(d) for d in docs])

    s = DocumentUploadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    stored = store_upload(s.validated_data['file'], DOCUMENTS)
    doc = Document.objects.create(
        id=_new_document_id(),
        device=device,
        user=request.user,
        device_name=device.name,
        document_type=resolve_document_type(
            s.validated_data.get('type'), default=Document.TYPE_CALIBRATION_CERTIFICATE,
        ),
        file_name=stored.original_name,
        document_url=stored.path,
        file_size=str(stored.size),
        uploaded_by=request.user.name or 'Administrator',
    )
    logger.info("Document %s uploaded for device %s", doc.id, device.code)
    return Response(serialize_document(doc), status=201)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def documents_list(request):
    if request.method == 'GET':
        q = DocumentListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = q.validated_data
        qs = Document.objects.select_related('user', 'device')
        term = (params.get('search') or '').strip()
        if term:
            qs = qs.filter(
                Q(device_name__icontains=term)
                | Q(file_name__icontains=term)
                | Q(document_type__icontains=term)
            )
        doc_type = params.get('type')
        if doc_type and doc_type != 'all':
            qs = qs.filter(document_type=resolve_document_type(doc_type, default=doc_type))
        return Response({
            'success': True,
            'documents': [serialize_document(d) for d in qs.order_by('-created_at')],
            'documentTypes': DOCUMENT_TYPES,
        })

    s = DocumentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    device = None
    if vd.get('deviceId'):
        device = get_device(vd['deviceId'])
    else:
        device = Device.objects.filter(name=vd['deviceName']).first()
    doc = Document.objects.create(
        id=_new_document_id(),
        device=device,
        user=request.user,
        device_name=vd['deviceName'],
        document_type=vd['documentType'],
        file_name=vd['fileName'],
        document_url=vd['documentUrl'],
        file_size=vd.get('fileSize') or None,
        uploaded_by=vd.get('uploadedBy') or request.user.name,
    )
    return Response({
        'success': True,
        'message': 'Document created',
        'document': serialize_document(doc),
    }, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def document_types(request):
    return Response({'success': True, 'documentTypes': DOCUMENT_TYPES})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def document_detail(request, doc_id: str):
    doc = _get_document(doc_id)
    if request.method == 'GET':
        return Response({'success': True, 'document': serialize_document(doc)})

    if request.method == 'DELETE':
        if _is_stored_upload(doc.document_url):
            delete_upload(doc.document_url)
        doc.delete()
        logger.info("Document %s deleted by user %s", doc_id, request.user.id)
        return Response({'success': True, 'message': 'Document deleted'})

    s = DocumentUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = {
        'deviceName': 'device_name',
        'documentType': 'document_type',
        'fileName': 'file_name',
        'documentUrl': 'document_url',
        'fileSize': 'file_size',
        'uploadedBy': 'uploaded_by',
    }
    for key, attr in fields.items():
        # Blank values keep the stored value
        if s.validated_data.get(key):
            setattr(doc, attr, s.validated_data[key])
    doc.save()
    return Response({'success': True, 'message': 'Document updated', 'document': serialize_document(doc)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def document_download(request, doc_id: str):
    doc = _get_document(doc_id)
    name = storage_name(doc.document_url or '')
    try:
        if not _is_stored_upload(doc.document_url) or not default_storage.exists(name):
            raise NotFound('File missing')
        fh = default_storage.open(name, 'rb')
    except (SuspiciousFileOperation, FileNotFoundError):
        raise NotFound('File missing')
    return FileResponse(fh, as_attachment=True, filename=doc.file_name)
