"""Reservation models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.status import BLOCKING_STATUSES, STATUS_CHOICES, ReservationStatus


class ReservationQuerySet(models.QuerySet):
    def blocking(self):
        return self.filter(status__in=[s.value for s in BLOCKING_STATUSES])

    def for_day(self, area_id: int, day):
        return self.filter(area_id=area_id, date=day)

    def for_condominium(self, condominium_id: int | None):
        return self.filter(area__condominium_id=condominium_id)


class Reservation(models.Model):
    """Reserva de um horário de uma área comum."""

    Status = ReservationStatus

    area = models.ForeignKey(
        "areas.Area",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    date = models.DateField(_("Data"))
    time_slot = models.CharField(_("Horário"), max_length=100)
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=ReservationStatus.PENDENTE.value,
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="decided_reservations",
        help_text=_("Gestor que aprovou ou rejeitou a reserva."),
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    canceled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        verbose_name = _("Reserva")
        verbose_name_plural = _("Reservas")
        ordering = ["-date", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["area", "date", "time_slot"],
                condition=Q(status="aprovada"),
                name="unique_approved_reservation_per_slot",
            ),
        ]
        indexes = [
            models.Index(fields=["area", "date", "status"], name="reservation_area_id_5b8e1d_idx"),
            models.Index(fields=["user", "status"], name="reservation_user_id_9c4a7f_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.area} {self.date:%d/%m/%Y} {self.time_slot} ({self.status})"

    @property
    def current_status(self) -> ReservationStatus:
        return ReservationStatus(self.status)

    @property
    def is_blocking(self) -> bool:
        return self.current_status.is_blocking

    def can_transition_to(self, target: ReservationStatus) -> bool:
        return self.current_status.can_transition_to(target)
