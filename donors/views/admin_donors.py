"""
Donor management for administrators.

All of these require an administrator token.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response

from ..authentication import AdminTokenAuthentication
from ..permissions import IsAdminRole
from ..serializers.donor import AdminDonorUpdateSerializer, DonorListQuerySerializer, DonorSerializer
from ..services import donors as donor_service


@api_view(['GET'])
@authentication_classes([AdminTokenAuthentication])
@permission_classes([IsAdminRole])
def admin_list_donors(request):
    data = DonorSerializer(donor_service.list_donors(), many=True).data
    return Response({'ok': True, 'donors': data})


@api_view(['GET'])
@authentication_classes([AdminTokenAuthentication])
@permission_classes([IsAdminRole])
def admin_search_donors(request):
    q = DonorListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    data = DonorSerializer(donor_service.search_donors(q.validated_data.get('q', '')), many=True).data
    return Response({'ok': True, 'donors': data})


@api_view(['GET', 'PUT', 'DELETE'])
@authentication_classes([AdminTokenAuthentication])
@permission_classes([IsAdminRole])
def admin_donor_detail(request, pk: int):
    admin = request.auth.identity
    if request.method == 'PUT':
        s = AdminDonorUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        donor = donor_service.admin_update_donor(admin, pk, **s.validated_data)
        return Response({'ok': True, 'donor': DonorSerializer(donor).data})
    if request.method == 'DELETE':
        donor_service.admin_delete_donor(admin, pk)
        return Response({'ok': True})
    return Response({'ok': True, 'donor': DonorSerializer(donor_service.get_donor_or_404(pk)).data})
