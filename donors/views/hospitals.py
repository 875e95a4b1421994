"""
Hospital endpoints: profile, blood inventory and recording donations.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response

from ..authentication import HospitalTokenAuthentication
from ..permissions import IsHospitalRole
from ..serializers.donation import DonationCreateSerializer, DonationSerializer, InventorySerializer
from ..serializers.hospital import HospitalProfileUpdateSerializer, HospitalSerializer
from ..services.accounts import update_hospital_profile
from ..services.inventory import hospital_inventory, record_donation


@api_view(['GET', 'PUT'])
@authentication_classes([HospitalTokenAuthentication])
@permission_classes([IsHospitalRole])
def hospital_profile(request):
    hospital = request.auth.identity
    if request.method == 'PUT':
        s = HospitalProfileUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        update_hospital_profile(hospital, **s.validated_data)
    return Response({'ok': True, 'hospital': HospitalSerializer(hospital).data})


@api_view(['GET'])
@authentication_classes([HospitalTokenAuthentication])
@permission_classes([IsHospitalRole])
def blood_inventory(request):
    entries = InventorySerializer(hospital_inventory(request.auth.identity), many=True).data
    return Response({'ok': True, 'inventory': entries})


@api_view(['POST'])
@authentication_classes([HospitalTokenAuthentication])
@permission_classes([IsHospitalRole])
def create_donation(request):
    """Record a donation made at the calling hospital and add it to stock."""
    s = DonationCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donation, entry = record_donation(request.auth.identity, **s.validated_data)
    return Response({
        'ok': True,
        'donation': DonationSerializer(donation).data,
        'inventory': InventorySerializer(entry).data,
    }, status=status.HTTP_201_CREATED)
