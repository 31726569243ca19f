from __future__ import annotations

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Attachment
from ..permissions import IsAdminRole
from ..serializers.attachment import AttachmentUploadSerializer
from ..services.uploads import ATTACHMENTS, delete_upload, store_upload
from .common import get_device

logger = logging.getLogger('medtrack.uploads')


def serialize_attachment(a: Attachment) -> dict:
    uploader = a.uploaded_by
    return {
        'id': a.id,
        'deviceId': a.device_id,
        'fileName': a.file_name,
        'filePath': a.file_path,
        'fileSize': a.file_size,
        'fileType': a.file_type,
        'category': a.category,
        'description': a.description,
        'uploader': {'id': uploader.id, 'name': uploader.name, 'email': uploader.email} if uploader else None,
        'createdAt': a.created_at.isoformat() if a.created_at else None,
        'updatedAt': a.updated_at.isoformat() if a.updated_at else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def device_attachments(request, pk: int):
    device = get_device(pk)
    if request.method == 'GET':
        qs = device.attachments.select_related('uploaded_by').order_by('-created_at')
        return Response([serialize_attachment(a) for a in qs])

    s = AttachmentUploadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    stored = store_upload(s.validated_data['file'], ATTACHMENTS)
    attachment = Attachment.objects.create(
        device=device,
        file_name=stored.original_name,
        file_path=stored.path,
        file_size=stored.size,
        file_type=stored.content_type,
        category=s.validated_data['category'],
        description=s.validated_data.get('description'),
        uploaded_by=request.user,
    )
    return Response(serialize_attachment(attachment), status=201)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def attachment_detail(request, pk: int):
    attachment = Attachment.objects.filter(pk=pk).first()
    if attachment is None:
        raise NotFound('Attachment not found')
    delete_upload(attachment.file_path)
    attachment.delete()
    logger.info("Attachment %s deleted by user %s", pk, request.user.id)
    return Response({'message': 'Attachment deleted'})
