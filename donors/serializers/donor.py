from rest_framework import serializers

from donors.models import Donor
from .fields import BloodTypeField, clean_phone, clean_text


class DonorRegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=100)
    phone = serializers.CharField(max_length=20)
    blood_type = BloodTypeField()
    medical_history = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_email(self, v):
        return v.strip().lower()

    def validate_phone(self, v):
        return clean_phone(v)

    def validate_medical_history(self, v):
        return clean_text(v) or None


class DonorProfileUpdateSerializer(serializers.Serializer):
    """Fields a donor may change on their own profile."""
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20)
    medical_history = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    validate_name = DonorRegisterSerializer.validate_name
    validate_phone = DonorRegisterSerializer.validate_phone
    validate_medical_history = DonorRegisterSerializer.validate_medical_history


class AdminDonorUpdateSerializer(DonorRegisterSerializer):
    """Administrators may also correct email and blood type."""


class DonorListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=100, required=False, allow_blank=True)


class DonorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Donor
        fields = ['id', 'name', 'email', 'phone', 'blood_type', 'medical_history', 'created_at']
        read_only_fields = fields
