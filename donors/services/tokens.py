"""
Session token service.

Tokens are simplejwt access tokens signed with ``JWT_SECRET``.  Besides the
standard ``exp``/``iat``/``jti`` claims they carry the subject id and the
role of the identity set that id belongs to.  Nothing is stored server side,
so a token stays valid until it expires.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.utils import datetime_from_epoch

from donors.models import IDENTITY_MODELS

ROLE_CLAIM = 'role'


@dataclass(frozen=True)
class SessionClaims:
    subject_id: int
    role: str
    issued_at: datetime
    expires_at: datetime


def issue_token(subject_id: int, role: str, *, now: Optional[datetime] = None) -> str:
    """Return a signed token for ``subject_id`` valid for ``SESSION_TOKEN_TTL``.

    ``now`` overrides the issue time (aware datetime); expiry is always
    measured from it.
    """
    if role not in IDENTITY_MODELS:
        raise ValueError(f"unknown role: {role}")
    token = AccessToken()
    if now is not None:
        token.set_iat(at_time=now)
        token.set_exp(from_time=now)
    token[api_settings.USER_ID_CLAIM] = subject_id
    token[ROLE_CLAIM] = role
    return str(token)


def verify_token(raw: str) -> Optional[SessionClaims]:
    """Return the claims of a valid token, or None.

    Bad signatures, expired tokens (``now >= exp``) and payloads without a
    well-typed subject and role all yield None.
    """
    if not raw:
        return None
    try:
        token = AccessToken(raw)
    except TokenError:
        return None

    subject_id = token.get(api_settings.USER_ID_CLAIM)
    role = token.get(ROLE_CLAIM)
    if isinstance(subject_id, bool) or not isinstance(subject_id, int):
        return None
    if role not in IDENTITY_MODELS:
        return None
    try:
        issued_at = datetime_from_epoch(token['iat'])
        expires_at = datetime_from_epoch(token['exp'])
    except (KeyError, TypeError, ValueError, OverflowError):
        return None
    return SessionClaims(subject_id=subject_id, role=role, issued_at=issued_at, expires_at=expires_at)
