"""
Registration and login endpoints.

Registering a donor or hospital logs it in straight away: the response
carries a session token just like a login would.  Every login view shares
the ``login`` throttle scope, which is the only brake on guessing the
(email, phone) pairs donors and hospitals sign in with.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from donors.serializers.auth import AdminLoginSerializer, ContactLoginSerializer
from donors.serializers.donor import DonorRegisterSerializer, DonorSerializer
from donors.serializers.hospital import HospitalRegisterSerializer, HospitalSerializer
from donors.services import accounts


def _client_ip(request):
    return request.META.get('REMOTE_ADDR')


# ---------------------------------------------------------------------
# Donors
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def donor_register_view(request):
    s = DonorRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donor, token = accounts.register_donor(**s.validated_data)
    return Response({'ok': True, 'token': token, 'donor': DonorSerializer(donor).data},
                    status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def donor_login_view(request):
    s = ContactLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donor, token = accounts.authenticate_donor(ip=_client_ip(request), **s.validated_data)
    return Response({'ok': True, 'token': token, 'donor': DonorSerializer(donor).data})

donor_login_view.cls.throttle_scope = 'login'


# ---------------------------------------------------------------------
# Hospitals
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def hospital_register_view(request):
    s = HospitalRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital, token = accounts.register_hospital(**s.validated_data)
    return Response({'ok': True, 'token': token, 'hospital': HospitalSerializer(hospital).data},
                    status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def hospital_login_view(request):
    s = ContactLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    hospital, token = accounts.authenticate_hospital(ip=_client_ip(request), **s.validated_data)
    return Response({'ok': True, 'token': token, 'hospital': HospitalSerializer(hospital).data})

hospital_login_view.cls.throttle_scope = 'login'


# ---------------------------------------------------------------------
# Administrators
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def admin_login_view(request):
    s = AdminLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    admin, token = accounts.authenticate_admin(ip=_client_ip(request), **s.validated_data)
    # Only the id and username leave the server; never the password hash
    return Response({'ok': True, 'token': token, 'admin': {'id': admin.id, 'username': admin.username}})

admin_login_view.cls.throttle_scope = 'login'
