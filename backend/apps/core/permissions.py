"""
DRF permission classes shared by the API apps.
"""

from rest_framework.permissions import BasePermission


def is_token_user(user) -> bool:
    return user is not None and getattr(user, 'is_authenticated', False)


class IsTokenAuthenticated(BasePermission):
    """Caller presented a valid access token."""
    message = 'User not authenticated'

    def has_permission(self, request, view):
        return is_token_user(request.user)


class IsSuperAdmin(BasePermission):
    """
    Caller is a platform super admin.

    Unauthenticated callers fail with 401 rather than 403 because DRF
    raises NotAuthenticated when no authenticator succeeded.
    """
    message = 'Super admin privileges required'

    def has_permission(self, request, view):
        from apps.authentication.models import UserRole

        if not is_token_user(request.user):
            return False
        return UserRole.is_super_admin_user(request.user.user_id)
