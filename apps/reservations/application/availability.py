"""Availability and manager calendar of an area."""

from __future__ import annotations

from collections import OrderedDict
from datetime import date
from typing import Any, Callable

from django.utils import timezone  # type: ignore

from shared.domain.exceptions import PermissionDeniedError, ValidationError
from shared.domain.value_objects import DateRange

from ..domain.availability import DayAvailability, compute_month
from ..models import Reservation
from ..policies import can_approve
from ..services import parse_reservation_date


def _to_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Valor inválido para {field}.", field=field)


class AvailabilityCalculator:
    """
    Month view of an area.

    Reads the blocking reservations of the month once and delegates to the
    pure ``compute_month``.
    """

    def __init__(self, today: Callable[[], date] | None = None) -> None:
        self.today = today or timezone.localdate

    def month_for(self, area, month: Any = None, year: Any = None) -> dict[date, DayAvailability]:
        current = self.today()
        month = current.month if month in (None, "") else _to_int(month, "month")
        year = current.year if year in (None, "") else _to_int(year, "year")
        try:
            period = DateRange.for_month(year, month)
        except ValueError:
            raise ValidationError("Mês deve estar entre 1 e 12 e o ano deve ser válido.", field="month")

        reservations = (
            Reservation.objects.filter(area=area, date__range=(period.start_date, period.end_date))
            .blocking()
            .order_by("date", "time_slot", "created_at")
            .only("date", "time_slot", "status")
        )
        return compute_month(area, month, year, list(reservations), current)


def reservation_calendar(area, actor, start_date: Any = None, end_date: Any = None) -> "OrderedDict[date, list[Reservation]]":
    """Blocking reservations of an area grouped by day, for managers."""
    if not can_approve(actor, area):
        raise PermissionDeniedError("Apenas gestores podem ver o calendário de reservas.")

    queryset = Reservation.objects.filter(area=area).blocking().select_related("user")
    if start_date not in (None, "") and end_date not in (None, ""):
        period_start = parse_reservation_date(start_date, field="startDate")
        period_end = parse_reservation_date(end_date, field="endDate")
        if period_start > period_end:
            raise ValidationError("Data inicial deve ser anterior à data final.", field="startDate")
        queryset = queryset.filter(date__range=(period_start, period_end))

    calendar: "OrderedDict[date, list[Reservation]]" = OrderedDict()
    for reservation in queryset.order_by("date", "time_slot"):
        calendar.setdefault(reservation.date, []).append(reservation)
    return calendar


availability_calculator = AvailabilityCalculator()
