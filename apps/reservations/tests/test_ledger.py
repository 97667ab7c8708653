"""Reservation ledger: creation rules and cancellation."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from unittest import mock

from django.test import TestCase
from django.utils import timezone

from apps.reservations.application.ledger import ReservationLedger, get_reservation
from apps.reservations.domain.status import ReservationStatus
from apps.reservations.models import Reservation
from shared.domain.exceptions import (
    CancellationWindowError,
    DuplicateBookingError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    SlotTakenError,
    ValidationError,
)

from .base import ReservationFixturesMixin


def at_hours_before(day: date, hours: int) -> datetime:
    midnight = timezone.make_aware(datetime.combine(day, time.min))
    return midnight - timedelta(hours=hours)


class ReservationCreateTests(ReservationFixturesMixin, TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.ledger = ReservationLedger()

    def test_pending_when_area_requires_approval(self) -> None:
        reservation = self.ledger.create(
            area_id=self.area.id, user=self.resident, date=self.day.isoformat(), time_slot="08-12"
        )

        self.assertEqual(reservation.status, ReservationStatus.PENDENTE.value)
        self.assertEqual(reservation.date, self.day)
        self.assertEqual(reservation.user, self.resident)

    def test_approved_directly_without_approval(self) -> None:
        self.area.requires_approval = False
        self.area.save()

        reservation = self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")

        self.assertEqual(reservation.status, ReservationStatus.APROVADA.value)

    def test_time_of_day_is_dropped(self) -> None:
        reservation = self.ledger.create(
            area_id=self.area.id,
            user=self.resident,
            date=f"{self.day.isoformat()}T15:45:00",
            time_slot="08-12",
        )

        self.assertEqual(reservation.date, self.day)

    def test_same_user_cannot_book_area_twice_on_a_day(self) -> None:
        self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")

        with self.assertRaises(DuplicateBookingError):
            self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="14-18")

    def test_daily_quota(self) -> None:
        self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")
        self.ledger.create(area_id=self.area.id, user=self.neighbour, date=self.day, time_slot="14-18")
        third = self.make_user("carla@example.com", "morador")

        with self.assertRaises(QuotaExceededError) as ctx:
            self.ledger.create(area_id=self.area.id, user=third, date=self.day, time_slot="19-23")

        self.assertEqual(ctx.exception.extra, {"current": 2, "limit": 2})

    def test_slot_taken(self) -> None:
        self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")

        with self.assertRaises(SlotTakenError) as ctx:
            self.ledger.create(area_id=self.area.id, user=self.neighbour, date=self.day, time_slot="08-12")

        self.assertEqual(ctx.exception.extra["time_slot"], "08-12")

    def test_cancelled_reservation_frees_the_slot(self) -> None:
        first = self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")
        self.ledger.cancel(first.id, self.resident)

        second = self.ledger.create(area_id=self.area.id, user=self.neighbour, date=self.day, time_slot="08-12")

        self.assertEqual(second.status, ReservationStatus.PENDENTE.value)

    def test_unknown_or_inactive_area(self) -> None:
        with self.assertRaises(NotFoundError):
            self.ledger.create(area_id=999_999, user=self.resident, date=self.day, time_slot="08-12")

        self.area.is_active = False
        self.area.save()
        with self.assertRaises(NotFoundError):
            self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")

    def test_input_validation(self) -> None:
        with self.assertRaises(ValidationError):
            self.ledger.create(area_id=None, user=self.resident, date=self.day, time_slot="08-12")
        with self.assertRaises(ValidationError):
            self.ledger.create(area_id=self.area.id, user=self.resident, date="10/06/2024", time_slot="08-12")
        with self.assertRaises(ValidationError):
            self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="")
        with self.assertRaises(ValidationError):
            self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="06-08")

        self.assertFalse(Reservation.objects.exists())

    def test_resident_of_another_condominium_cannot_book(self) -> None:
        stranger = self.make_user("carla@aurora.example.com", "morador", condominium=self.other_condominium)

        with self.assertRaises(PermissionDeniedError):
            self.ledger.create(area_id=self.area.id, user=stranger, date=self.day, time_slot="08-12")

        self.assertFalse(Reservation.objects.exists())

    def test_approved_slot_is_taken_for_direct_booking(self) -> None:
        self.area.requires_approval = False
        self.area.save()
        Reservation.objects.create(
            area=self.area,
            user=self.neighbour,
            date=self.day,
            time_slot="08-12",
            status=ReservationStatus.APROVADA.value,
        )

        with self.assertRaises(SlotTakenError):
            self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")

    def test_unique_approved_slot_constraint_maps_to_slot_taken(self) -> None:
        self.area.requires_approval = False
        self.area.save()
        Reservation.objects.create(
            area=self.area,
            user=self.neighbour,
            date=self.day,
            time_slot="08-12",
            status=ReservationStatus.APROVADA.value,
        )

        # Pretend the day looked empty when checked
        with mock.patch(
            "apps.reservations.application.ledger.blocking_reservations_for_day",
            return_value=Reservation.objects.none(),
        ):
            with self.assertRaises(SlotTakenError):
                self.ledger.create(area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12")

        self.assertEqual(Reservation.objects.filter(area=self.area, date=self.day).count(), 1)

    def test_blocking_count_never_exceeds_quota(self) -> None:
        users = [self.resident, self.neighbour] + [
            self.make_user(f"morador{i}@example.com", "morador") for i in range(3)
        ]
        for user, slot in zip(users, ["08-12", "14-18", "19-23", "08-12", "14-18"]):
            try:
                self.ledger.create(area_id=self.area.id, user=user, date=self.day, time_slot=slot)
            except (QuotaExceededError, SlotTakenError):
                pass

        blocking = Reservation.objects.filter(area=self.area, date=self.day).blocking()
        self.assertEqual(blocking.count(), self.area.max_reservations_per_day)


class ReservationCancelTests(ReservationFixturesMixin, TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.reservation = ReservationLedger().create(
            area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12"
        )

    def test_cancel_inside_deadline_is_refused(self) -> None:
        ledger = ReservationLedger(clock=lambda: at_hours_before(self.day, 23))

        with self.assertRaises(CancellationWindowError) as ctx:
            ledger.cancel(self.reservation.id, self.resident)

        self.assertEqual(ctx.exception.required_hours, 24)
        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.status, ReservationStatus.PENDENTE.value)

    def test_cancel_outside_deadline(self) -> None:
        now = at_hours_before(self.day, 25)
        ledger = ReservationLedger(clock=lambda: now)

        reservation = ledger.cancel(self.reservation.id, self.resident)

        self.assertEqual(reservation.status, ReservationStatus.CANCELADA.value)
        self.assertEqual(reservation.canceled_at, now)

    def test_second_cancel_is_invalid(self) -> None:
        ledger = ReservationLedger()
        ledger.cancel(self.reservation.id, self.resident)

        with self.assertRaises(InvalidStateError):
            ledger.cancel(self.reservation.id, self.resident)

    def test_locked_lookup_leaves_user_row_unlocked(self) -> None:
        with mock.patch(
            "apps.reservations.application.ledger.lock_queryset_if_possible",
            side_effect=lambda queryset, of=(): queryset.select_for_update(of=of),
        ) as lock:
            reservation = get_reservation(self.reservation.id, lock=True)

        self.assertEqual(reservation, self.reservation)
        queryset = lock.call_args.args[0]
        self.assertEqual(lock.call_args.kwargs["of"], ("self", "area"))
        self.assertEqual(set(queryset.query.select_related), {"area", "user"})

    def test_concluded_reservation_cannot_be_cancelled(self) -> None:
        Reservation.objects.filter(pk=self.reservation.pk).update(status=ReservationStatus.CONCLUIDA.value)

        with self.assertRaises(InvalidStateError):
            ReservationLedger().cancel(self.reservation.id, self.resident)

    def test_only_owner_or_manager_cancels(self) -> None:
        ledger = ReservationLedger()
        with self.assertRaises(PermissionDeniedError):
            ledger.cancel(self.reservation.id, self.neighbour)
        with self.assertRaises(PermissionDeniedError):
            ledger.cancel(self.reservation.id, self.outsider)

        reservation = ledger.cancel(self.reservation.id, self.porteiro)
        self.assertEqual(reservation.status, ReservationStatus.CANCELADA.value)

    def test_missing_reservation(self) -> None:
        with self.assertRaises(NotFoundError):
            ReservationLedger().cancel(999_999, self.resident)
