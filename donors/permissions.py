"""
Permission classes for role based access control.

The authenticators already refuse tokens of the wrong role; these classes
make the required role explicit on every view and deny requests that
carried no token at all.
"""
from rest_framework.permissions import BasePermission


class _RolePermission(BasePermission):
    role = ''

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == self.role)


class IsDonorRole(_RolePermission):
    """Allow access only to authenticated donors."""
    role = "donor"


class IsHospitalRole(_RolePermission):
    """Allow access only to authenticated hospitals."""
    role = "hospital"


class IsAdminRole(_RolePermission):
    """Allow access only to administrators."""
    role = "admin"
