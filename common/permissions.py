"""Role gate shared by every app.

Authentication itself is done by ``JWTAuthentication``; these classes only
check the role carried by the authenticated user.
"""

from rest_framework import permissions

from common.choices import UserRole


class HasRole(permissions.BasePermission):
    """Allow access only to authenticated users whose role is in ``allowed_roles``."""

    allowed_roles = ()
    message = "Access denied."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return getattr(user, "role", None) in self.allowed_roles


class IsClient(HasRole):
    allowed_roles = (UserRole.USER,)
    message = "Only clients can perform this action."


class IsAdvocate(HasRole):
    allowed_roles = (UserRole.ADVOCATE,)
    message = "Only advocates can perform this action."


class IsAdminRole(HasRole):
    allowed_roles = (UserRole.ADMIN,)
    message = "Only administrators can perform this action."
