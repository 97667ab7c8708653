"""
Unit of Work

Wraps a reservation command in ``transaction.atomic`` and holds the
domain events it raises. Events reach the message bus only from
``transaction.on_commit``: a rolled back booking notifies nobody.
"""

from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Usage:
        with DjangoUnitOfWork() as uow:
            reservation = get_reservation(reservation_id, lock=True)
            reservation.status = ReservationStatus.APROVADA.value
            reservation.save()
            uow.add_event(ReservationApproved(...))
    """

    def __init__(self):
        self._pending: List[DomainEvent] = []
        self._atomic = transaction.atomic()

    def __enter__(self):
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        events, self._pending = self._pending, []
        if exc_type is not None and events:
            logger.warning(f"Transaction aborted, dropping {len(events)} events")
        elif events:
            transaction.on_commit(lambda: self._publish(events))
        return self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._pending.append(event)

    @staticmethod
    def _publish(events: List[DomainEvent]):
        # The booking is already committed; a delivery failure stays here.
        from shared.application.message_bus import message_bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        try:
            message_bus.publish_events(events)
        except Exception as e:
            logger.error(f"Error publishing events: {e}", exc_info=True)
