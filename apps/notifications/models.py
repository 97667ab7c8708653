"""Notification model.

An in-app notification shown in the resident or manager inbox. Every
dispatched message is stored here; push delivery is best effort on top.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Type(models.TextChoices):
        RESERVATION_REQUEST = 'reservation_request', 'Solicitação de reserva'
        RESERVATION_APPROVED = 'reservation_approved', 'Reserva aprovada'
        RESERVATION_REJECTED = 'reservation_rejected', 'Reserva rejeitada'
        RESERVATION_CANCELLED = 'reservation_cancelled', 'Reserva cancelada'
        GENERAL = 'general', 'Geral'

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='notifications'
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    type = models.CharField(max_length=40, choices=Type.choices, default=Type.GENERAL)
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read', '-created_at'], name='notif_user_read_created_idx'),
        ]

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title}"

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=['is_read', 'read_at'])
