"""
Month availability of an area

Pure computation over the area's rules and the blocking reservations of the
month. The caller supplies ``today``; nothing here reads the clock or the
database, so the same inputs always give the same calendar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Protocol, Sequence

from shared.domain.value_objects import DateRange

from .status import BLOCKING_STATUSES, ReservationStatus


class BookableArea(Protocol):
    available_slots: Sequence[str]
    available_days: Sequence[int]
    max_reservations_per_day: int


class BookedSlot(Protocol):
    date: date
    time_slot: str
    status: str


def weekday_index(day: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def total_slots_for(area: BookableArea) -> int:
    """
    Bookable places per day: labels capped by the daily quota, never below one.

    An area with three labels and a quota of two reports ``totalSlots`` 2,
    not 3, so ``availableSlots`` reaches zero exactly when create() starts
    refusing with a quota error.
    """
    return max(1, min(len(area.available_slots or ()), area.max_reservations_per_day))


@dataclass(frozen=True)
class DayReservation:
    time_slot: str
    status: str


@dataclass(frozen=True)
class DayAvailability:
    day: date
    is_day_available: bool
    is_past_date: bool
    total_slots: int
    reserved_slots: int
    reservations: tuple[DayReservation, ...] = field(default_factory=tuple)
    free_labels: tuple[str, ...] = field(default_factory=tuple)

    @property
    def available_slots(self) -> int:
        return max(0, self.total_slots - self.reserved_slots)

    @property
    def available(self) -> bool:
        return self.is_day_available and not self.is_past_date and self.available_slots > 0


def compute_month(
    area: BookableArea,
    month: int,
    year: int,
    reservations: Iterable[BookedSlot],
    today: date,
) -> dict[date, DayAvailability]:
    """
    Availability for every day of the month, ordered by date.

    Only blocking reservations (pendente, aprovada) count; anything else in
    ``reservations`` is ignored. Raises ``ValueError`` for a month outside 1-12.
    """
    period = DateRange.for_month(year, month)
    allowed_days = set(area.available_days or ())
    labels = list(area.available_slots or ())
    total_slots = total_slots_for(area)

    by_day: dict[date, list[DayReservation]] = {}
    for reservation in reservations:
        if ReservationStatus(reservation.status) not in BLOCKING_STATUSES:
            continue
        if not period.contains(reservation.date):
            continue
        by_day.setdefault(reservation.date, []).append(
            DayReservation(time_slot=reservation.time_slot, status=ReservationStatus(reservation.status).value)
        )

    calendar: dict[date, DayAvailability] = {}
    for day in period.days():
        day_reservations = tuple(by_day.get(day, ()))
        taken = {r.time_slot for r in day_reservations}
        calendar[day] = DayAvailability(
            day=day,
            is_day_available=weekday_index(day) in allowed_days,
            is_past_date=day < today,
            total_slots=total_slots,
            reserved_slots=len(day_reservations),
            reservations=day_reservations,
            free_labels=tuple(label for label in labels if label not in taken),
        )
    return calendar
