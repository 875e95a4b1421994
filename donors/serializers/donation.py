from rest_framework import serializers

from donors.models import BloodInventory, Donation
from .fields import BloodTypeField


class DonationCreateSerializer(serializers.Serializer):
    donor_id = serializers.IntegerField(min_value=1)
    blood_type = BloodTypeField()
    quantity = serializers.IntegerField(min_value=1, max_value=10000)


class DonationSerializer(serializers.ModelSerializer):
    hospital_name = serializers.CharField(source='hospital.name', read_only=True)

    class Meta:
        model = Donation
        fields = ['id', 'hospital_id', 'hospital_name', 'donor_id', 'blood_type', 'quantity', 'donation_date']
        read_only_fields = fields


class InventorySerializer(serializers.ModelSerializer):
    class Meta:
        model = BloodInventory
        fields = ['hospital_id', 'blood_type', 'quantity', 'last_updated']
        read_only_fields = fields
