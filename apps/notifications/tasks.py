"""Celery tasks for notification delivery."""

from __future__ import annotations

import logging

import requests
from celery import shared_task  # type: ignore

logger = logging.getLogger(__name__)


@shared_task
def send_push_notifications(messages: list[dict]) -> int:
    """Deliver prepared Expo messages. Failures are logged, never retried."""
    from .push import send_push_messages

    try:
        tickets = send_push_messages(messages)
    except requests.RequestException as exc:
        logger.error(f"Failed to deliver {len(messages)} push notifications: {exc}", exc_info=True)
        return 0

    logger.info(f"Delivered {len(tickets)} push notifications")
    return len(tickets)
