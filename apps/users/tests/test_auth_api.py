"""API tests for authentication and profile endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import Condominium, User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.condominium = Condominium.objects.create(name="Residencial Jardins")
        self.user = User.objects.create_user(
            email="morador@example.com",
            password="StrongPass123",
            username="Ana",
            phone="(11) 98888-7777",
            condominium=self.condominium,
            unit_block="B",
            unit_number="101",
        )

    def test_login_returns_tokens(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "MORADOR@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.MORADOR)
        self.assertEqual(response.data["user"]["unit"], "B - 101")

    def test_login_with_wrong_password(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": self.user.email, "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_access_token_authenticates_requests(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"email": self.user.email, "password": "StrongPass123"},
            format="json",
        )
        access = login.data["tokens"]["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        response = self.client.get(reverse("user-me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["condominium"]["id"], self.condominium.id)

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("user-me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_push_token_registration(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.put(
            reverse("user-push-token"),
            {"push_token": "ExponentPushToken[abc123]"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.user.refresh_from_db()
        self.assertEqual(self.user.push_token, "ExponentPushToken[abc123]")


class UserRoleTests(APITestCase):
    def test_phone_is_normalized(self) -> None:
        user = User.objects.create_user(email="p@example.com", password="x", phone="(11) 98888-7777")
        self.assertEqual(user.phone, "11988887777")

    def test_role_helpers(self) -> None:
        condominium = Condominium.objects.create(name="Edifício Aurora")
        porteiro = User.objects.create_user(
            email="porteiro@example.com", password="x", role=User.RoleChoices.PORTEIRO, condominium=condominium
        )
        sindico = User.objects.create_user(
            email="sindico@example.com", password="x", role=User.RoleChoices.SINDICO, condominium=condominium
        )
        master = User.objects.create_superuser(email="master@example.com", password="x", username="root")

        self.assertTrue(porteiro.is_manager())
        self.assertFalse(porteiro.is_area_admin())
        self.assertTrue(sindico.is_area_admin())
        self.assertTrue(master.is_master())
        self.assertTrue(porteiro.belongs_to(condominium.id))
        self.assertFalse(master.belongs_to(condominium.id))
