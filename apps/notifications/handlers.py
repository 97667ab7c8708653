"""Reservation event handlers that notify residents and managers."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore

from apps.reservations.domain.events import (
    ReservationApproved,
    ReservationRejected,
    ReservationRequested,
)
from shared.application.message_bus import MessageBus

from .dispatcher import notification_dispatcher
from .models import Notification

logger = logging.getLogger(__name__)


def _format_date(value) -> str:
    return value.strftime("%d/%m/%Y")


def notify_managers_of_request(event: ReservationRequested) -> None:
    User = get_user_model()
    managers = User.objects.filter(
        condominium_id=event.condominium_id,
        role__in=settings.RESERVATION_MANAGER_ROLES,
        is_active=True,
    )
    notification_dispatcher.dispatch(
        managers,
        "📅 Nova Solicitação de Reserva",
        f"{event.user_name} solicitou reserva da {event.area_name} "
        f"para {_format_date(event.date)} ({event.time_slot})",
        {"type": Notification.Type.RESERVATION_REQUEST.value, "reservationId": event.reservation_id},
    )


def notify_resident_of_approval(event: ReservationApproved) -> None:
    User = get_user_model()
    resident = User.objects.filter(pk=event.user_id).first()
    notification_dispatcher.dispatch(
        [resident],
        "✅ Reserva Aprovada!",
        f"Sua reserva da {event.area_name} para {_format_date(event.date)} "
        f"({event.time_slot}) foi aprovada!",
        {"type": Notification.Type.RESERVATION_APPROVED.value, "reservationId": event.reservation_id},
    )


def notify_resident_of_rejection(event: ReservationRejected) -> None:
    User = get_user_model()
    resident = User.objects.filter(pk=event.user_id).first()
    notification_dispatcher.dispatch(
        [resident],
        "❌ Reserva Não Aprovada",
        f"Sua reserva da {event.area_name} para {_format_date(event.date)} "
        f"não foi aprovada. Motivo: {event.reason}",
        {"type": Notification.Type.RESERVATION_REJECTED.value, "reservationId": event.reservation_id},
    )


def register_handlers(bus: MessageBus) -> None:
    bus.register_event_handler(ReservationRequested, notify_managers_of_request)
    bus.register_event_handler(ReservationApproved, notify_resident_of_approval)
    bus.register_event_handler(ReservationRejected, notify_resident_of_rejection)
    logger.debug("Reservation notification handlers registered")
