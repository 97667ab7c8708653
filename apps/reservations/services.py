"""Query helpers shared by the reservation services."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from django.utils.dateparse import parse_date  # type: ignore

from shared.domain.exceptions import ValidationError


def parse_reservation_date(value: Any, *, field: str = "date") -> date:
    """
    Normalize input to a calendar day.

    Accepts a ``date``, a ``datetime`` (time of day is dropped) or an ISO
    string such as ``2025-03-15`` or ``2025-03-15T10:30:00``.
    """
    if value in (None, ""):
        raise ValidationError("Data é obrigatória.", field=field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            parsed = parse_date(value.strip()[:10])
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    raise ValidationError("Data inválida. Use o formato AAAA-MM-DD.", field=field)


def blocking_reservations_for_day(area_id: int, day: date):
    from .models import Reservation  # Local import to prevent circular dependency

    return Reservation.objects.for_day(area_id, day).blocking()
