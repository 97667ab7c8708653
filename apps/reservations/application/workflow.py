"""Approval workflow: managers decide pending reservations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.areas.services import lock_queryset_if_possible
from apps.areas.models import Area
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ApprovalConflictError, InvalidStateError, PermissionDeniedError

from ..domain.events import ReservationApproved, ReservationRejected
from ..domain.status import ReservationStatus
from ..models import Reservation
from ..policies import can_approve
from .ledger import get_reservation

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "Sem motivo informado"


class ApprovalWorkflow:
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock or timezone.now

    def _load_for_decision(self, reservation_id: Any, actor) -> Reservation:
        reservation = get_reservation(reservation_id, lock=True)
        if not can_approve(actor, reservation.area):
            raise PermissionDeniedError("Apenas porteiro, zelador ou síndico podem decidir reservas.")
        if reservation.current_status is not ReservationStatus.PENDENTE:
            raise InvalidStateError("Esta reserva não está pendente de aprovação.", status=reservation.status)
        return reservation

    def approve(self, reservation_id: Any, actor) -> Reservation:
        with DjangoUnitOfWork() as uow:
            reservation = self._load_for_decision(reservation_id, actor)
            # Same lock as ReservationLedger.create
            list(lock_queryset_if_possible(Area.objects.filter(pk=reservation.area_id)))

            already_approved = Reservation.objects.filter(
                area_id=reservation.area_id,
                date=reservation.date,
                time_slot=reservation.time_slot,
                status=ReservationStatus.APROVADA.value,
            ).exclude(pk=reservation.pk)
            if already_approved.exists():
                raise ApprovalConflictError(time_slot=reservation.time_slot)

            reservation.status = ReservationStatus.APROVADA.value
            reservation.approved_by = actor
            reservation.approved_at = self.clock()
            try:
                with transaction.atomic():
                    reservation.save(update_fields=["status", "approved_by", "approved_at", "updated_at"])
            except IntegrityError:
                raise ApprovalConflictError(time_slot=reservation.time_slot)

            uow.add_event(
                ReservationApproved(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    area_name=reservation.area.name,
                    user_id=reservation.user_id,
                    approved_by_id=actor.pk,
                    date=reservation.date,
                    time_slot=reservation.time_slot,
                )
            )

        logger.info(f"Reservation {reservation.pk} approved by user {actor.pk}")
        return reservation

    def reject(self, reservation_id: Any, actor, reason: str | None = None) -> Reservation:
        reason = (reason or "").strip()

        with DjangoUnitOfWork() as uow:
            reservation = self._load_for_decision(reservation_id, actor)

            reservation.status = ReservationStatus.REJEITADA.value
            reservation.approved_by = actor
            reservation.approved_at = self.clock()
            reservation.rejection_reason = reason or DEFAULT_REJECTION_REASON
            reservation.save(
                update_fields=["status", "approved_by", "approved_at", "rejection_reason", "updated_at"]
            )

            uow.add_event(
                ReservationRejected(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    area_name=reservation.area.name,
                    user_id=reservation.user_id,
                    rejected_by_id=actor.pk,
                    date=reservation.date,
                    time_slot=reservation.time_slot,
                    reason=reservation.rejection_reason,
                )
            )

        logger.info(f"Reservation {reservation.pk} rejected by user {actor.pk}")
        return reservation


approval_workflow = ApprovalWorkflow()
