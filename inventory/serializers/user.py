from rest_framework import serializers

from inventory.models import User


class UserListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True)
    role = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)


class UserUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    email = serializers.EmailField(max_length=100, required=False)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)
    department = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=User.STATUS_CHOICES, required=False)
    password = serializers.CharField(required=False, allow_blank=True, write_only=True)

    def validate_email(self, v):
        v = v.strip().lower()
        instance = self.context.get('user')
        qs = User.objects.filter(email__iexact=v)
        if instance is not None:
            qs = qs.exclude(pk=instance.pk)
        if qs.exists():
            raise serializers.ValidationError('Email already exists')
        return v


class UserStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=User.STATUS_CHOICES,
        error_messages={'invalid_choice': 'Invalid status', 'required': 'Invalid status'},
    )
