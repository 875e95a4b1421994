"""
Donor self-service endpoints.

Every view here accepts donor tokens only; the donor acted upon is always
the caller, taken from the resolved session rather than from the URL.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response

from ..authentication import DonorTokenAuthentication
from ..permissions import IsDonorRole
from ..serializers.donation import DonationSerializer
from ..serializers.donor import DonorProfileUpdateSerializer, DonorSerializer
from ..services.accounts import update_donor_profile
from ..services.inventory import donor_donations


@api_view(['GET', 'PUT'])
@authentication_classes([DonorTokenAuthentication])
@permission_classes([IsDonorRole])
def donor_profile(request):
    """GET returns the donor with their donation history; PUT overwrites
    name, phone and medical history."""
    donor = request.auth.identity
    if request.method == 'PUT':
        s = DonorProfileUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        update_donor_profile(donor, **s.validated_data)
        return Response({'ok': True, 'donor': DonorSerializer(donor).data})

    donations = DonationSerializer(donor_donations(donor), many=True).data
    return Response({'ok': True, 'donor': DonorSerializer(donor).data, 'donations': donations})


@api_view(['GET'])
@authentication_classes([DonorTokenAuthentication])
@permission_classes([IsDonorRole])
def my_donations(request):
    donations = DonationSerializer(donor_donations(request.auth.identity), many=True).data
    return Response({'ok': True, 'donations': donations})
