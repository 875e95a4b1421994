import bleach
from rest_framework import serializers

from donors.models import BLOOD_TYPES


def clean_text(v):
    if v is None:
        return v
    return bleach.clean(v.strip(), tags=[], strip=True)


def clean_phone(v):
    v = (v or '').strip()
    if not v:
        raise serializers.ValidationError('Phone is required')
    return v


class BloodTypeField(serializers.ChoiceField):
    def __init__(self, **kwargs):
        super().__init__(choices=BLOOD_TYPES, **kwargs)
