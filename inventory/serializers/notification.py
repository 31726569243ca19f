from rest_framework import serializers

from inventory.models import Notification, NotificationType


class NotificationListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=NotificationType.choices, required=False)
    unreadOnly = serializers.BooleanField(required=False, default=False)
    deviceId = serializers.IntegerField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=50)
    offset = serializers.IntegerField(required=False, min_value=0, default=0)


class NotificationCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    type = serializers.ChoiceField(choices=NotificationType.choices)
    deviceId = serializers.IntegerField()
    dueDate = serializers.DateTimeField(required=False, allow_null=True)
    priority = serializers.IntegerField(
        required=False,
        min_value=Notification.PRIORITY_LOW,
        max_value=Notification.PRIORITY_CRITICAL,
        default=Notification.PRIORITY_MEDIUM,
    )
    metadata = serializers.DictField(required=False, allow_null=True)
