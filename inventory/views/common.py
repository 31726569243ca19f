from rest_framework.exceptions import NotFound

from ..models import Device


def get_device(pk) -> Device:
    device = Device.objects.filter(pk=pk).first()
    if device is None:
        raise NotFound('Device not found')
    return device
