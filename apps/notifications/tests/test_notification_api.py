"""API tests for the notification inbox."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.notifications.models import Notification
from apps.users.models import User


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="ana@example.com", password="x")
        self.other = User.objects.create_user(email="bruno@example.com", password="x")
        self.first = Notification.objects.create(user=self.user, title="A", message="a")
        self.second = Notification.objects.create(user=self.user, title="B", message="b")
        Notification.objects.create(user=self.other, title="C", message="c")
        self.client.force_authenticate(self.user)

    def test_lists_only_own_notifications(self) -> None:
        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({n["title"] for n in response.data}, {"A", "B"})

    def test_mark_one_read(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.first.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["isRead"])
        self.assertIsNotNone(response.data["readAt"])

        count = self.client.get(reverse("notification-unread-count"))
        self.assertEqual(count.data, {"count": 1})

    def test_mark_all_read(self) -> None:
        response = self.client.post(reverse("notification-mark-all-read"))

        self.assertEqual(response.data, {"updated": 2})
        self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())
        self.assertTrue(Notification.objects.filter(user=self.other, is_read=False).exists())

    def test_cannot_read_someone_elses_notification(self) -> None:
        foreign = Notification.objects.get(user=self.other)

        response = self.client.post(reverse("notification-mark-read", args=[foreign.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
