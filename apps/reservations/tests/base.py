"""Shared setup for reservation tests."""

from __future__ import annotations

from datetime import date, timedelta

from apps.areas.models import Area
from apps.users.models import Condominium, User


class ReservationFixturesMixin:
    """Condominium with a resident, a neighbour, managers and one area."""

    password = "StrongPass123"

    def setUp(self) -> None:
        super().setUp()  # type: ignore
        self.condominium = Condominium.objects.create(name="Residencial Jardins")
        self.other_condominium = Condominium.objects.create(name="Edifício Aurora")

        self.resident = self.make_user("ana@example.com", User.RoleChoices.MORADOR, unit_number="101")
        self.neighbour = self.make_user("bruno@example.com", User.RoleChoices.MORADOR, unit_number="102")
        self.porteiro = self.make_user("porteiro@example.com", User.RoleChoices.PORTEIRO)
        self.zelador = self.make_user("zelador@example.com", User.RoleChoices.ZELADOR)
        self.sindico = self.make_user("sindico@example.com", User.RoleChoices.SINDICO)
        self.outsider = self.make_user(
            "porteiro@aurora.example.com",
            User.RoleChoices.PORTEIRO,
            condominium=self.other_condominium,
        )

        self.area = Area.objects.create(
            condominium=self.condominium,
            name="Salão de Festas",
            available_slots=["08-12", "14-18", "19-23"],
            max_reservations_per_day=2,
            requires_approval=True,
            cancellation_deadline_hours=24,
        )
        self.day = date.today() + timedelta(days=10)

    def make_user(self, email: str, role: str, condominium=None, **extra) -> User:
        return User.objects.create_user(
            email=email,
            password=self.password,
            username=email.split("@")[0].title(),
            role=role,
            condominium=condominium or self.condominium,
            **extra,
        )
