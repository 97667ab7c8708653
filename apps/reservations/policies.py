"""Capability checks for reservations.

Each operation evaluates its check once, before touching any state.
"""

from __future__ import annotations


def _is_manager_of(user, condominium_id: int | None) -> bool:
    if user.is_master():
        return True
    return user.is_manager() and user.belongs_to(condominium_id)


def can_book(user, area) -> bool:
    """Only members of the area's condominium (or master) may book it."""
    if not getattr(user, "is_authenticated", False):
        return False
    return user.is_master() or user.belongs_to(area.condominium_id)


def can_approve(user, area) -> bool:
    """Porteiro, zelador or síndico of the area's condominium decide requests."""
    if not getattr(user, "is_authenticated", False):
        return False
    return _is_manager_of(user, area.condominium_id)


def can_cancel(user, reservation) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    if reservation.user_id == user.pk:
        return True
    return _is_manager_of(user, reservation.area.condominium_id)


def can_view_reservation(user, reservation) -> bool:
    return can_cancel(user, reservation)


def can_view_condominium_reservations(user, condominium_id: int | None) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    return _is_manager_of(user, condominium_id)


def can_export_report(user) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    return user.is_master() or user.role == user.RoleChoices.SINDICO
