from rest_framework import serializers

from inventory.models import Device


class DeviceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Device
        fields = [
            'id', 'code', 'name', 'specification', 'status', 'calibration_date',
            'next_calibration_date', 'location', 'serial_number', 'category', 'price',
            'supplier_company', 'purchaser_department', 'image_url', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class DeviceListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Device.STATUS_CHOICES, required=False)


class CalibrationUpdateSerializer(serializers.Serializer):
    next_calibration_date = serializers.DateTimeField(
        error_messages={'required': 'Missing next_calibration_date', 'null': 'Missing next_calibration_date'},
    )
    calibration_report = serializers.CharField(required=False, allow_blank=True)
    calibration_by = serializers.CharField(required=False, allow_blank=True, max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True)
