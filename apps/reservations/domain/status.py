"""
Reservation status state machine

State transitions:
- PENDENTE -> APROVADA (manager approved)
- PENDENTE -> REJEITADA (manager rejected)
- PENDENTE -> CANCELADA (resident or manager cancelled)
- APROVADA -> CANCELADA
- REJEITADA -> CANCELADA
- CANCELADA and CONCLUIDA are terminal

Nothing moves a reservation to CONCLUIDA yet; the value is kept so that
records imported with it remain valid.
"""

from enum import Enum


class ReservationStatus(str, Enum):
    PENDENTE = 'pendente'      # Waiting for a manager decision
    APROVADA = 'aprovada'      # Confirmed
    REJEITADA = 'rejeitada'    # Refused by a manager
    CANCELADA = 'cancelada'    # Withdrawn
    CONCLUIDA = 'concluida'    # Took place

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_blocking(self) -> bool:
        return self in BLOCKING_STATUSES

    def can_transition_to(self, target: 'ReservationStatus') -> bool:
        return ReservationStatus(target) in TRANSITIONS[self]


STATUS_LABELS = {
    ReservationStatus.PENDENTE: 'Pendente',
    ReservationStatus.APROVADA: 'Aprovada',
    ReservationStatus.REJEITADA: 'Rejeitada',
    ReservationStatus.CANCELADA: 'Cancelada',
    ReservationStatus.CONCLUIDA: 'Concluída',
}

TRANSITIONS = {
    ReservationStatus.PENDENTE: frozenset({
        ReservationStatus.APROVADA,
        ReservationStatus.REJEITADA,
        ReservationStatus.CANCELADA,
    }),
    ReservationStatus.APROVADA: frozenset({ReservationStatus.CANCELADA}),
    ReservationStatus.REJEITADA: frozenset({ReservationStatus.CANCELADA}),
    ReservationStatus.CANCELADA: frozenset(),
    ReservationStatus.CONCLUIDA: frozenset(),
}

# A blocking reservation occupies its slot and counts towards the daily quota
BLOCKING_STATUSES = frozenset({ReservationStatus.PENDENTE, ReservationStatus.APROVADA})

STATUS_CHOICES = [(status.value, status.label) for status in ReservationStatus]
