"""Capability checks for area administration."""

from __future__ import annotations


def can_manage_areas(user, condominium_id: int | None) -> bool:
    """Zelador and síndico manage the areas of their own condominium."""
    if not getattr(user, "is_authenticated", False):
        return False
    if user.is_master():
        return True
    return user.is_area_admin() and user.belongs_to(condominium_id)


def can_view_area(user, area) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    return user.is_master() or user.belongs_to(area.condominium_id)
