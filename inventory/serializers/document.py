from rest_framework import serializers

from inventory.models import Document

# Short names accepted by the upload endpoint
DOCUMENT_TYPE_ALIASES = {
    'calibration': Document.TYPE_CALIBRATION_CERTIFICATE,
    'manual': Document.TYPE_USER_MANUAL,
    'report': Document.TYPE_REPAIR_REPORT,
    'inspection': Document.TYPE_DAILY_INSPECTION,
}
DOCUMENT_TYPE_LABELS = dict(Document.TYPE_CHOICES)


def resolve_document_type(value, default=None):
    """Map a type key, its label or a short alias onto a stored type key."""
    if not value:
        return default
    value = str(value).strip()
    if value in DOCUMENT_TYPE_LABELS:
        return value
    if value in DOCUMENT_TYPE_ALIASES:
        return DOCUMENT_TYPE_ALIASES[value]
    for key, label in DOCUMENT_TYPE_LABELS.items():
        if label.lower() == value.lower():
            return key
    return default


class DocumentTypeField(serializers.CharField):
    def to_internal_value(self, data):
        value = resolve_document_type(super().to_internal_value(data))
        if value is None:
            raise serializers.ValidationError('Unknown document type')
        return value


class DocumentUploadSerializer(serializers.Serializer):
    file = serializers.FileField(error_messages={'required': 'File is required'})
    type = serializers.CharField(required=False, allow_blank=True, default='calibration')


class DocumentCreateSerializer(serializers.Serializer):
    deviceName = serializers.CharField(max_length=255)
    documentType = DocumentTypeField()
    fileName = serializers.CharField(max_length=255)
    documentUrl = serializers.CharField()
    fileSize = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    uploadedBy = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    deviceId = serializers.IntegerField(required=False, allow_null=True)


class DocumentUpdateSerializer(serializers.Serializer):
    deviceName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    documentType = DocumentTypeField(required=False, allow_blank=True)
    fileName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    documentUrl = serializers.CharField(required=False, allow_blank=True)
    fileSize = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    uploadedBy = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)


class DocumentListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    type = serializers.CharField(required=False, allow_blank=True)
