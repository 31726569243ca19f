from rest_framework import serializers

from inventory.models import User


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField()

    def validate_email(self, v):
        v = (v or '').strip().lower()
        if not v:
            raise serializers.ValidationError('Email is required')
        return v


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField()
    new_password = serializers.CharField(min_length=6)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, error_messages={'required': 'Missing fields', 'blank': 'Missing fields'})
    email = serializers.EmailField(max_length=100, error_messages={'required': 'Missing fields', 'blank': 'Missing fields'})
    password = serializers.CharField(write_only=True, error_messages={'required': 'Missing fields', 'blank': 'Missing fields'})
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default=User.ROLE_USER)
    department = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=User.STATUS_CHOICES, default=User.STATUS_ACTIVE)

    def validate_email(self, v):
        v = v.strip().lower()
        if User.objects.filter(email__iexact=v).exists():
            raise serializers.ValidationError('Email already exists')
        return v


class ResetPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={'required': 'Email is required', 'blank': 'Email is required'})
