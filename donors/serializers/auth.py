from rest_framework import serializers


class ContactLoginSerializer(serializers.Serializer):
    """Donor and hospital login: the (email, phone) pair."""
    email = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20)

    def validate_email(self, v):
        return (v or '').strip().lower()

    def validate_phone(self, v):
        return (v or '').strip()


class AdminLoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=50)
    password = serializers.CharField(trim_whitespace=False)

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v
