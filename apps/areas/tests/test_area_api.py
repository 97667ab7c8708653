"""Integration tests for area API endpoints."""

from __future__ import annotations

from datetime import date, timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.areas.models import Area
from apps.reservations.models import Reservation
from apps.users.models import Condominium, User


class AreaAPITests(APITestCase):
    def setUp(self) -> None:
        self.condominium = Condominium.objects.create(name="Residencial Jardins")
        self.sindico = User.objects.create_user(
            email="sindico@example.com",
            password="x",
            role=User.RoleChoices.SINDICO,
            condominium=self.condominium,
        )
        self.resident = User.objects.create_user(
            email="morador@example.com",
            password="x",
            username="Ana",
            phone="11988887777",
            condominium=self.condominium,
            unit_number="101",
        )
        self.porteiro = User.objects.create_user(
            email="porteiro@example.com",
            password="x",
            role=User.RoleChoices.PORTEIRO,
            condominium=self.condominium,
        )
        self.area = Area.objects.create(
            condominium=self.condominium,
            name="Salão de Festas",
            available_slots=["08-12", "14-18", "19-23"],
            max_reservations_per_day=2,
        )
        self.list_url = reverse("area-list")

    def test_sindico_creates_area_with_partial_rules(self) -> None:
        self.client.force_authenticate(self.sindico)
        payload = {
            "name": "Churrasqueira",
            "rules": {"maxReservationsPerDay": 2, "fee": "50.00"},
            "availableDays": [5, 6, 0],
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["rules"]["maxReservationsPerDay"], 2)
        self.assertEqual(response.data["rules"]["fee"], "50.00")
        self.assertEqual(response.data["rules"]["cancellationDeadlineHours"], 24)
        self.assertEqual(response.data["availableDays"], [0, 5, 6])
        self.assertEqual(len(response.data["availableSlots"]), 3)

    def test_duplicate_active_name_conflicts(self) -> None:
        self.client.force_authenticate(self.sindico)

        response = self.client.post(self.list_url, {"name": "Salão de Festas"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "duplicate_name")

    def test_resident_cannot_create_or_delete(self) -> None:
        self.client.force_authenticate(self.resident)

        self.assertEqual(
            self.client.post(self.list_url, {"name": "Piscina"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(
            self.client.delete(reverse("area-detail", args=[self.area.id])).status_code,
            status.HTTP_403_FORBIDDEN,
        )

    def test_partial_update_and_soft_delete(self) -> None:
        self.client.force_authenticate(self.sindico)
        detail_url = reverse("area-detail", args=[self.area.id])

        response = self.client.patch(detail_url, {"rules": {"requiresApproval": False}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["rules"]["requiresApproval"])
        self.assertEqual(response.data["rules"]["maxReservationsPerDay"], 2)

        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_200_OK)
        self.area.refresh_from_db()
        self.assertFalse(self.area.is_active)

        self.client.force_authenticate(self.resident)
        self.assertEqual(self.client.get(self.list_url).data, [])

    def test_listing_shows_own_condominium_only(self) -> None:
        other = Condominium.objects.create(name="Outro")
        Area.objects.create(condominium=other, name="Piscina")
        self.client.force_authenticate(self.resident)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a["name"] for a in response.data], ["Salão de Festas"])

    def test_month_availability(self) -> None:
        day = timezone.localdate() + timedelta(days=40)
        for user, slot in ((self.resident, "08-12"), (self.sindico, "14-18")):
            Reservation.objects.create(area=self.area, user=user, date=day, time_slot=slot, status="pendente")
        self.client.force_authenticate(self.resident)

        response = self.client.get(
            reverse("area-availability", args=[self.area.id]),
            {"month": day.month, "year": day.year},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["month"], day.month)
        info = response.data["availability"][day.isoformat()]
        self.assertEqual(info["reservedSlots"], 2)
        self.assertEqual(info["availableSlots"], 0)
        self.assertFalse(info["available"])
        self.assertEqual(info["freeSlots"], ["19-23"])

    def test_availability_defaults_to_current_month(self) -> None:
        self.client.force_authenticate(self.resident)
        today = timezone.localdate()

        response = self.client.get(reverse("area-availability", args=[self.area.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual((response.data["month"], response.data["year"]), (today.month, today.year))
        self.assertIn(date(today.year, today.month, 1).isoformat(), response.data["availability"])

    def test_availability_rejects_invalid_month(self) -> None:
        self.client.force_authenticate(self.resident)

        response = self.client.get(reverse("area-availability", args=[self.area.id]), {"month": 13})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar_for_managers(self) -> None:
        day = timezone.localdate() + timedelta(days=5)
        Reservation.objects.create(area=self.area, user=self.resident, date=day, time_slot="14-18", status="aprovada")
        Reservation.objects.create(area=self.area, user=self.resident, date=day, time_slot="08-12", status="cancelada")

        self.client.force_authenticate(self.porteiro)
        response = self.client.get(
            reverse("area-calendar", args=[self.area.id]),
            {"startDate": day.isoformat(), "endDate": day.isoformat()},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        entries = response.data[day.isoformat()]
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0]["timeSlot"], "14-18")
        self.assertEqual(entries[0]["user"], {"name": "Ana", "unit": "101", "phone": "11988887777"})

        self.client.force_authenticate(self.resident)
        forbidden = self.client.get(reverse("area-calendar", args=[self.area.id]))
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
