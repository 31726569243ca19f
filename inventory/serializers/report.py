import bleach
from rest_framework import serializers

from inventory.models import Report


class ReportCreateSerializer(serializers.Serializer):
    message = serializers.CharField(error_messages={'required': 'Message is required', 'blank': 'Message is required'})
    image = serializers.FileField(required=False, allow_null=True)

    def validate_message(self, v):
        v = bleach.clean((v or '').strip(), tags=set(), strip=True)
        if not v:
            raise serializers.ValidationError('Message is required')
        return v


class ReportStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Report.STATUS_CHOICES,
        error_messages={'invalid_choice': 'Invalid status', 'required': 'Invalid status'},
    )
