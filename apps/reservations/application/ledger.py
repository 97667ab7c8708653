"""
Reservation ledger

Creates and cancels reservations. Every check and the write run inside a
single transaction with the area row locked, so two residents booking the
same area are serialised.
"""

from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Callable

from django.db import IntegrityError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.areas.services import AreaCatalog, area_catalog, lock_queryset_if_possible
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    CancellationWindowError,
    DuplicateBookingError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    SlotTakenError,
    ValidationError,
)

from ..domain.events import ReservationCancelled, ReservationRequested
from ..domain.status import ReservationStatus
from ..models import Reservation
from ..policies import can_book, can_cancel
from ..services import blocking_reservations_for_day, parse_reservation_date

logger = logging.getLogger(__name__)


def get_reservation(reservation_id: Any, *, lock: bool = False) -> Reservation:
    if lock:
        # Nullable relations stay out of the join, FOR UPDATE rejects outer joins.
        # The resident's user row is read but not locked.
        queryset = lock_queryset_if_possible(
            Reservation.objects.select_related("area", "user"), of=("self", "area")
        )
    else:
        queryset = Reservation.objects.select_related("area", "area__condominium", "user", "approved_by")
    try:
        return queryset.get(pk=reservation_id)
    except (Reservation.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Reserva não encontrada.")


class ReservationLedger:
    """Reservation records and the conflict rules applied when booking."""

    def __init__(
        self,
        catalog: AreaCatalog | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.catalog = catalog or area_catalog
        self.clock = clock or timezone.now

    def create(self, *, area_id: Any, user, date: Any, time_slot: str | None) -> Reservation:
        """
        Book ``time_slot`` of an area on ``date`` for ``user``.

        Checks run in a fixed order and the first failing one is raised:
        duplicate booking by the same user, daily quota, slot taken.
        """
        if area_id in (None, ""):
            raise ValidationError("Área é obrigatória.", field="areaId")
        time_slot = (time_slot or "").strip()
        if not time_slot:
            raise ValidationError("Horário é obrigatório.", field="timeSlot")
        day = parse_reservation_date(date)

        with DjangoUnitOfWork() as uow:
            area = self.catalog.get_bookable_area(area_id, lock=True)
            if not can_book(user, area):
                raise PermissionDeniedError("Esta área pertence a outro condomínio.")
            if not area.has_slot(time_slot):
                raise ValidationError(
                    "Horário não disponível para esta área.",
                    field="timeSlot",
                    available_slots=list(area.available_slots),
                )

            blocking = blocking_reservations_for_day(area.pk, day)

            if blocking.filter(user=user).exists():
                raise DuplicateBookingError()

            current = blocking.count()
            if current >= area.max_reservations_per_day:
                raise QuotaExceededError(current=current, limit=area.max_reservations_per_day)

            if blocking.filter(time_slot=time_slot).exists():
                raise SlotTakenError(time_slot=time_slot)

            status = ReservationStatus.PENDENTE if area.requires_approval else ReservationStatus.APROVADA
            try:
                reservation = Reservation.objects.create(
                    area=area,
                    user=user,
                    date=day,
                    time_slot=time_slot,
                    status=status.value,
                )
            except IntegrityError:
                raise SlotTakenError(time_slot=time_slot)

            if area.requires_approval:
                uow.add_event(
                    ReservationRequested(
                        aggregate_id=reservation.pk,
                        reservation_id=reservation.pk,
                        area_id=area.pk,
                        area_name=area.name,
                        condominium_id=area.condominium_id,
                        user_id=user.pk,
                        user_name=user.display_name,
                        date=day,
                        time_slot=time_slot,
                    )
                )

        logger.info(
            f"Reservation {reservation.pk} created for area {area.pk} on {day} ({time_slot}) "
            f"by user {user.pk} with status {reservation.status}"
        )
        return reservation

    def hours_until(self, reservation: Reservation) -> float:
        """Hours from now until the start (local midnight) of the reservation day."""
        starts_at = timezone.make_aware(datetime.combine(reservation.date, time.min))
        return (starts_at - self.clock()).total_seconds() / 3600

    def cancel(self, reservation_id: Any, actor) -> Reservation:
        with DjangoUnitOfWork() as uow:
            reservation = get_reservation(reservation_id, lock=True)

            if not can_cancel(actor, reservation):
                raise PermissionDeniedError()

            if not reservation.can_transition_to(ReservationStatus.CANCELADA):
                raise InvalidStateError("Esta reserva não pode mais ser cancelada.", status=reservation.status)

            required_hours = reservation.area.cancellation_deadline_hours
            hours_until = self.hours_until(reservation)
            if hours_until < required_hours:
                logger.info(
                    f"Cancellation of reservation {reservation.pk} refused: "
                    f"{hours_until:.1f}h left, {required_hours}h required"
                )
                raise CancellationWindowError(required_hours, hours_until)

            reservation.status = ReservationStatus.CANCELADA.value
            reservation.canceled_at = self.clock()
            reservation.save(update_fields=["status", "canceled_at", "updated_at"])

            uow.add_event(
                ReservationCancelled(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    area_id=reservation.area_id,
                    user_id=reservation.user_id,
                    cancelled_by_id=actor.pk,
                    date=reservation.date,
                    time_slot=reservation.time_slot,
                )
            )

        logger.info(f"Reservation {reservation.pk} cancelled by user {actor.pk}")
        return reservation


reservation_ledger = ReservationLedger()
