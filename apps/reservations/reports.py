"""Reservation report for the síndico: listing, fee total and CSV export."""

from __future__ import annotations

import csv
import unicodedata
from dataclasses import dataclass
from io import StringIO
from typing import Any

from django.utils import timezone  # type: ignore

from shared.domain.exceptions import PermissionDeniedError, ValidationError
from shared.domain.value_objects import DateRange, Money

from .domain.status import ReservationStatus
from .models import Reservation
from .policies import can_export_report
from .services import parse_reservation_date

ALL = "todas"

CSV_HEADERS = ["Data", "Morador", "Unidade", "Área", "Horário", "Valor", "Status"]


@dataclass
class ReservationReport:
    period: DateRange
    reservations: list[Reservation]
    condominium_name: str

    @property
    def total_fee(self) -> Money:
        """Fees of approved reservations. Informational, nothing is charged."""
        total = Money.zero()
        for reservation in self.reservations:
            if reservation.current_status is ReservationStatus.APROVADA:
                total = total + Money(reservation.area.fee)
        return total

    def count_by_status(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ReservationStatus}
        for reservation in self.reservations:
            counts[reservation.status] += 1
        return counts

    @property
    def filename(self) -> str:
        slug = unicodedata.normalize("NFD", self.condominium_name)
        slug = "".join(ch for ch in slug if not unicodedata.combining(ch))
        slug = "".join(ch if ch.isalnum() else " " for ch in slug)
        slug = "_".join(slug.split()).lower() or "condominio"
        return f"{slug}_{timezone.localdate():%d_%m_%Y}.csv"


def build_report(
    actor,  # type: ignore
    start_date: Any,
    end_date: Any,
    status: str | None = None,
    area_id: Any = None,
) -> ReservationReport:
    if not can_export_report(actor):
        raise PermissionDeniedError("Apenas o síndico pode gerar relatórios.")
    if start_date in (None, "") or end_date in (None, ""):
        raise ValidationError("Data inicial e final são obrigatórias.")

    start = parse_reservation_date(start_date, field="startDate")
    end = parse_reservation_date(end_date, field="endDate")
    try:
        period = DateRange(start, end)
    except ValueError:
        raise ValidationError("Data inicial deve ser anterior à data final.", field="startDate")

    queryset = Reservation.objects.filter(date__range=(period.start_date, period.end_date)).select_related(
        "area", "user", "approved_by"
    )
    if not actor.is_master():
        queryset = queryset.for_condominium(actor.condominium_id)

    if status and status != ALL:
        try:
            queryset = queryset.filter(status=ReservationStatus(status).value)
        except ValueError:
            raise ValidationError("Status inválido.", field="status")

    if area_id not in (None, "", ALL):
        try:
            queryset = queryset.filter(area_id=int(area_id))
        except (TypeError, ValueError):
            raise ValidationError("Área inválida.", field="areaId")

    condominium = getattr(actor, "condominium", None)
    return ReservationReport(
        period=period,
        reservations=list(queryset.order_by("date", "time_slot")),
        condominium_name=condominium.name if condominium else "Condomínio",
    )


def _format_fee(amount) -> str:
    if not amount:
        return "Grátis"
    return f"R$ {amount:.2f}".replace(".", ",")


def render_csv(report: ReservationReport) -> bytes:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Relatório de Reservas", report.condominium_name])
    writer.writerow(["Período", str(report.period)])
    writer.writerow([])
    writer.writerow(CSV_HEADERS)
    for reservation in report.reservations:
        user = reservation.user
        writer.writerow(
            [
                reservation.date.strftime("%d/%m/%Y"),
                user.display_name if user else "Usuário removido",
                (user.unit_label if user else "") or "-",
                reservation.area.name,
                reservation.time_slot,
                _format_fee(reservation.area.fee),
                reservation.current_status.label,
            ]
        )
    writer.writerow([])
    writer.writerow(["Total arrecadado (aprovadas)", _format_fee(report.total_fee.amount)])
    return buffer.getvalue().encode("utf-8-sig")
