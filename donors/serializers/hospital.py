from rest_framework import serializers

from donors.models import Hospital
from .fields import clean_phone, clean_text


def _required_text(v, label):
    v = clean_text(v)
    if not v:
        raise serializers.ValidationError(f'{label} is required')
    return v


class HospitalRegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=100)
    phone = serializers.CharField(max_length=20)
    address = serializers.CharField(max_length=255)
    contact_person = serializers.CharField(max_length=100)

    def validate_name(self, v):
        return _required_text(v, 'Name')

    def validate_email(self, v):
        return v.strip().lower()

    def validate_phone(self, v):
        return clean_phone(v)

    def validate_address(self, v):
        return _required_text(v, 'Address')

    def validate_contact_person(self, v):
        return _required_text(v, 'Contact person')


class HospitalProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=20)
    address = serializers.CharField(max_length=255)

    validate_name = HospitalRegisterSerializer.validate_name
    validate_phone = HospitalRegisterSerializer.validate_phone
    validate_address = HospitalRegisterSerializer.validate_address


class HospitalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hospital
        fields = ['id', 'name', 'email', 'phone', 'address', 'contact_person', 'created_at']
        read_only_fields = fields
