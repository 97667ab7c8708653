"""
Area rule set

Value objects describing how an area may be booked. They carry no
persistence concerns: the ``Area`` model flattens them into columns.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError

DEFAULT_AVAILABLE_SLOTS = ("08:00 - 12:00", "14:00 - 18:00", "19:00 - 23:00")
# 0 = domingo ... 6 = sábado
DEFAULT_AVAILABLE_DAYS = (0, 1, 2, 3, 4, 5, 6)


@dataclass(frozen=True)
class AreaRules(ValueObject):
    """
    Booking rules of an area.

    ``fee`` and ``fee_percentage`` are informational only. The advance
    booking windows are recorded for clients to display; reservations are
    not rejected by them.
    """

    max_reservations_per_day: int = 1
    capacity: int | None = None
    fee: Decimal = Decimal("0.00")
    fee_percentage: Decimal = Decimal("0.00")
    cancellation_deadline_hours: int = 24
    min_advance_booking_hours: int = 24
    max_advance_booking_days: int = 30
    requires_approval: bool = True

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "fee", Decimal(str(self.fee)))
            object.__setattr__(self, "fee_percentage", Decimal(str(self.fee_percentage)))
        except InvalidOperation:
            raise ValidationError("Taxa inválida.")

        if self.max_reservations_per_day < 1:
            raise ValidationError("O limite de reservas por dia deve ser pelo menos 1.")
        if self.capacity is not None and self.capacity < 1:
            raise ValidationError("A capacidade deve ser pelo menos 1.")
        if self.fee < 0:
            raise ValidationError("A taxa não pode ser negativa.")
        if not Decimal("0") <= self.fee_percentage <= Decimal("100"):
            raise ValidationError("O percentual da taxa deve estar entre 0 e 100.")
        if self.cancellation_deadline_hours < 0:
            raise ValidationError("O prazo de cancelamento não pode ser negativo.")
        if self.min_advance_booking_hours < 0:
            raise ValidationError("A antecedência mínima não pode ser negativa.")
        if self.max_advance_booking_days < 1:
            raise ValidationError("A antecedência máxima deve ser pelo menos 1 dia.")

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    def merged(self, changes: dict[str, Any] | None) -> "AreaRules":
        """Return a copy where only the given sub-fields change."""
        if not changes:
            return self
        unknown = set(changes) - self.field_names()
        if unknown:
            raise ValidationError(f"Regras desconhecidas: {', '.join(sorted(unknown))}.")
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def normalize_slots(labels: Iterable[str] | None) -> list[str]:
    """Strip labels and keep their order; empty or repeated labels are rejected."""
    if labels is None:
        return list(DEFAULT_AVAILABLE_SLOTS)

    normalized: list[str] = []
    for label in labels:
        if not isinstance(label, str) or not label.strip():
            raise ValidationError("Horários devem ser textos não vazios.")
        label = label.strip()
        if label in normalized:
            raise ValidationError(f"Horário repetido: {label}.")
        normalized.append(label)

    if not normalized:
        raise ValidationError("Informe pelo menos um horário disponível.")
    return normalized


def normalize_days(days: Iterable[int] | None) -> list[int]:
    if days is None:
        return list(DEFAULT_AVAILABLE_DAYS)

    normalized = set()
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise ValidationError("Dias disponíveis devem estar entre 0 (domingo) e 6 (sábado).")
        normalized.add(day)
    return sorted(normalized)
