import bleach
from rest_framework import serializers

from inventory.models import Attachment


class AttachmentUploadSerializer(serializers.Serializer):
    file = serializers.FileField(error_messages={'required': 'File is required'})
    category = serializers.ChoiceField(choices=Attachment.CATEGORY_CHOICES, default='other')
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_description(self, v):
        return bleach.clean((v or '').strip(), tags=set(), strip=True) or None
