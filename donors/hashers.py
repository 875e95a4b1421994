"""Password hasher used for administrator accounts."""
from django.contrib.auth.hashers import BCryptSHA256PasswordHasher


class BCryptCost10Hasher(BCryptSHA256PasswordHasher):
    """bcrypt (SHA-256 pre-hashed) with the work factor pinned at 10."""

    rounds = 10
