"""Role-based permission classes shared by the booking APIs."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def _is_platform_admin(user) -> bool:
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_master") and user.is_master()


class IsCondominiumManager(permissions.BasePermission):
    """
    Porteiro, zelador, síndico or the platform master.

    These roles see every reservation of their condominium and decide
    pending requests.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if _is_platform_admin(user):
            return True
        return hasattr(user, "is_manager") and user.is_manager()


class IsAreaAdminOrReadOnly(permissions.BasePermission):
    """
    Allow zelador/síndico to write, anyone authenticated can read.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False

        if request.method in permissions.SAFE_METHODS:
            return True

        if _is_platform_admin(user):
            return True
        return hasattr(user, "is_area_admin") and user.is_area_admin()
