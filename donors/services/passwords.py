"""
Password hashing service.

Hashing goes through Django's hasher framework (see ``PASSWORD_HASHERS``),
which salts every call and compares digests in constant time.  Hashes
written by the legacy seeding script are plain bcrypt strings
(``$2b$10$...``); those are still accepted by :func:`verify_password`.
"""
from __future__ import annotations

import bcrypt
from django.contrib.auth.hashers import check_password, make_password

LEGACY_BCRYPT_PREFIXES = ('$2a$', '$2b$', '$2y$')


def hash_password(plaintext: str) -> str:
    return make_password(plaintext)


def verify_password(plaintext: str, encoded: str | None) -> bool:
    """Return True if ``plaintext`` matches ``encoded``.

    Never raises: missing, unknown or corrupt encodings simply do not match.
    """
    if plaintext is None or not encoded:
        return False
    if encoded.startswith(LEGACY_BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(plaintext.encode('utf-8'), encoded.encode('utf-8'))
        except ValueError:
            return False
    try:
        return check_password(plaintext, encoded)
    except ValueError:
        return False
