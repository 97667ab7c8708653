"""
Notification dispatcher

Fire-and-forget delivery used by the reservation event handlers: the
message is stored as an in-app notification for every recipient and the
push delivery is queued on Celery. A failure is logged and reported as
``False``; it never propagates to the booking operation.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.conf import settings  # type: ignore

from .models import Notification
from .push import build_message, is_expo_push_token

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def dispatch(
        self,
        recipients: Iterable,
        title: str,
        body: str,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        metadata = dict(metadata or {})
        recipients = [user for user in recipients if user is not None]
        if not recipients:
            logger.debug(f"No recipients for notification '{title}'")
            return True

        try:
            notification_type = metadata.get("type", Notification.Type.GENERAL)
            Notification.objects.bulk_create(
                [
                    Notification(
                        user=user,
                        title=title,
                        message=body,
                        type=notification_type,
                        data=metadata,
                    )
                    for user in recipients
                ]
            )

            messages = [
                build_message(user.push_token, title, body, metadata)
                for user in recipients
                if is_expo_push_token(user.push_token)
            ]
            if messages and settings.PUSH_NOTIFICATIONS_ENABLED:
                from .tasks import send_push_notifications

                send_push_notifications.delay(messages)

            logger.info(
                f"Notification '{title}' stored for {len(recipients)} user(s), "
                f"{len(messages)} push message(s)"
            )
            return True
        except Exception as e:
            logger.error(f"Failed to dispatch notification '{title}': {e}", exc_info=True)
            return False


notification_dispatcher = NotificationDispatcher()
