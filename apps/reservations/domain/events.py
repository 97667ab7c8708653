"""
Reservation Domain Events

Published after the booking transaction commits. Notification handlers
subscribe to them; ``ReservationCancelled`` has no subscriber yet.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class ReservationRequested(DomainEvent):
    """
    Event: A reservation was created and awaits approval

    Triggers:
    - Notify porteiro, zelador and síndico of the condominium
    """
    reservation_id: int
    area_id: int
    area_name: str
    condominium_id: int
    user_id: int
    user_name: str
    date: date
    time_slot: str


@dataclass(kw_only=True)
class ReservationApproved(DomainEvent):
    """
    Event: PENDENTE -> APROVADA

    Triggers:
    - Notify the resident
    """
    reservation_id: int
    area_name: str
    user_id: int
    approved_by_id: int
    date: date
    time_slot: str


@dataclass(kw_only=True)
class ReservationRejected(DomainEvent):
    """
    Event: PENDENTE -> REJEITADA

    Triggers:
    - Notify the resident with the reason
    """
    reservation_id: int
    area_name: str
    user_id: int
    rejected_by_id: int
    date: date
    time_slot: str
    reason: str


@dataclass(kw_only=True)
class ReservationCancelled(DomainEvent):
    """Event: reservation moved to CANCELADA by its owner or a manager"""
    reservation_id: int
    area_id: int
    user_id: int
    cancelled_by_id: int
    date: date
    time_slot: str
