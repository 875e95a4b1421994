"""
Role-scoped bearer token authentication.

Each protected view names the authenticator of the one role it serves.
An authenticator accepts a token only if its role claim equals the
authenticator's role, and then resolves the subject id inside that role's
own table.  A donor token therefore never resolves to a hospital even
when the two share a numeric id.
"""
from __future__ import annotations

from dataclasses import dataclass

from rest_framework import authentication

from .exceptions import AuthError
from .models import Administrator, Donor, Hospital, Identity
from .services.tokens import SessionClaims, verify_token


@dataclass(frozen=True)
class SessionContext:
    """What a handler knows about the caller; exposed as ``request.auth``."""
    identity: Identity
    role: str
    claims: SessionClaims


class RoleTokenAuthentication(authentication.BaseAuthentication):
    keyword = 'Bearer'
    model: type[Identity] = Identity

    @property
    def role(self) -> str:
        return self.model.role

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise AuthError('Invalid token header')
        try:
            raw = auth[1].decode()
        except UnicodeError:
            raise AuthError('Invalid token header')

        claims = verify_token(raw)
        if claims is None:
            raise AuthError('Invalid or expired token')
        if claims.role != self.role:
            raise AuthError('Token not valid for this resource')

        identity = self.model.objects.filter(pk=claims.subject_id).first()
        if identity is None:
            raise AuthError('Account no longer exists')
        return identity, SessionContext(identity=identity, role=self.role, claims=claims)

    def authenticate_header(self, request) -> str:
        return f'{self.keyword} realm="api"'


class DonorTokenAuthentication(RoleTokenAuthentication):
    model = Donor


class HospitalTokenAuthentication(RoleTokenAuthentication):
    model = Hospital


class AdminTokenAuthentication(RoleTokenAuthentication):
    model = Administrator
