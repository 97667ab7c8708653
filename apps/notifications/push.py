"""Expo push delivery."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Iterator

import requests
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)

# Expo accepts at most 100 messages per request
EXPO_CHUNK_SIZE = 100

_EXPO_TOKEN_RE = re.compile(r"^(ExponentPushToken|ExpoPushToken)\[.+\]$")
_EXPO_UUID_RE = re.compile(r"^[a-z\d]{8}-[a-z\d]{4}-[a-z\d]{4}-[a-z\d]{4}-[a-z\d]{12}$", re.IGNORECASE)


def is_expo_push_token(token: str | None) -> bool:
    if not token:
        return False
    return bool(_EXPO_TOKEN_RE.match(token) or _EXPO_UUID_RE.match(token))


def build_message(token: str, title: str, body: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "to": token,
        "sound": "default",
        "title": title,
        "body": body,
        "data": data or {},
        "priority": "high",
    }


def chunked(messages: list[dict[str, Any]], size: int = EXPO_CHUNK_SIZE) -> Iterator[list[dict[str, Any]]]:
    for start in range(0, len(messages), size):
        yield messages[start:start + size]


def send_push_messages(messages: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Post messages to the Expo push service and return the tickets.

    Raises ``requests.RequestException`` on transport or HTTP errors.
    """
    messages = list(messages)
    tickets: list[dict[str, Any]] = []
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    for chunk in chunked(messages):
        response = requests.post(
            settings.EXPO_PUSH_URL,
            headers=headers,
            json=chunk,
            timeout=settings.PUSH_REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        tickets.extend(response.json().get("data", []))

    errors = [ticket for ticket in tickets if ticket.get("status") == "error"]
    if errors:
        logger.warning(f"Expo rejected {len(errors)} of {len(tickets)} push messages: {errors}")
    return tickets
