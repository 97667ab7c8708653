"""Approval workflow."""

from __future__ import annotations

from unittest import mock

from django.db.models.query import QuerySet
from django.test import TestCase

from apps.notifications.models import Notification
from apps.reservations.application.ledger import ReservationLedger
from apps.reservations.application.workflow import DEFAULT_REJECTION_REASON, ApprovalWorkflow
from apps.reservations.domain.status import ReservationStatus
from apps.reservations.models import Reservation
from shared.domain.exceptions import ApprovalConflictError, InvalidStateError, PermissionDeniedError

from .base import ReservationFixturesMixin


class ApprovalWorkflowTests(ReservationFixturesMixin, TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.workflow = ApprovalWorkflow()
        self.reservation = ReservationLedger().create(
            area_id=self.area.id, user=self.resident, date=self.day, time_slot="08-12"
        )

    def test_approve_pending_reservation(self) -> None:
        reservation = self.workflow.approve(self.reservation.id, self.porteiro)

        self.assertEqual(reservation.status, ReservationStatus.APROVADA.value)
        self.assertEqual(reservation.approved_by, self.porteiro)
        self.assertIsNotNone(reservation.approved_at)

    def test_second_pending_for_same_slot_conflicts_on_approval(self) -> None:
        duplicate = Reservation.objects.create(
            area=self.area,
            user=self.neighbour,
            date=self.day,
            time_slot="08-12",
            status=ReservationStatus.PENDENTE.value,
        )
        self.workflow.approve(self.reservation.id, self.porteiro)

        with self.assertRaises(ApprovalConflictError):
            self.workflow.approve(duplicate.id, self.sindico)

        duplicate.refresh_from_db()
        self.assertEqual(duplicate.status, ReservationStatus.PENDENTE.value)
        self.assertEqual(
            Reservation.objects.filter(
                area=self.area, date=self.day, time_slot="08-12", status=ReservationStatus.APROVADA.value
            ).count(),
            1,
        )

    def test_unique_approved_slot_constraint_maps_to_conflict(self) -> None:
        Reservation.objects.create(
            area=self.area,
            user=self.neighbour,
            date=self.day,
            time_slot="08-12",
            status=ReservationStatus.APROVADA.value,
        )

        # Skip the conflicting-approval lookup so the database constraint decides
        with mock.patch.object(QuerySet, "exists", return_value=False):
            with self.assertRaises(ApprovalConflictError):
                self.workflow.approve(self.reservation.id, self.porteiro)

        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.status, ReservationStatus.PENDENTE.value)
        self.assertIsNone(self.reservation.approved_by_id)

    def test_reject_with_default_reason(self) -> None:
        reservation = self.workflow.reject(self.reservation.id, self.zelador)

        self.assertEqual(reservation.status, ReservationStatus.REJEITADA.value)
        self.assertEqual(reservation.rejection_reason, DEFAULT_REJECTION_REASON)
        self.assertEqual(reservation.approved_by, self.zelador)
        self.assertIsNotNone(reservation.approved_at)

    def test_reject_with_reason(self) -> None:
        reservation = self.workflow.reject(self.reservation.id, self.zelador, "Manutenção no salão")

        self.assertEqual(reservation.rejection_reason, "Manutenção no salão")

    def test_only_pending_can_be_decided(self) -> None:
        self.workflow.approve(self.reservation.id, self.porteiro)

        with self.assertRaises(InvalidStateError):
            self.workflow.approve(self.reservation.id, self.porteiro)
        with self.assertRaises(InvalidStateError):
            self.workflow.reject(self.reservation.id, self.porteiro)

    def test_residents_and_other_condominiums_cannot_decide(self) -> None:
        with self.assertRaises(PermissionDeniedError):
            self.workflow.approve(self.reservation.id, self.resident)
        with self.assertRaises(PermissionDeniedError):
            self.workflow.reject(self.reservation.id, self.outsider)

    def test_resident_is_notified_after_commit(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            self.workflow.reject(self.reservation.id, self.zelador, "Salão em reforma")

        notification = Notification.objects.get(user=self.resident)
        self.assertEqual(notification.type, Notification.Type.RESERVATION_REJECTED)
        self.assertIn("Salão em reforma", notification.message)
        self.assertEqual(notification.data["reservationId"], self.reservation.id)

    def test_managers_are_notified_of_new_requests(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            ReservationLedger().create(area_id=self.area.id, user=self.neighbour, date=self.day, time_slot="14-18")

        notified = set(
            Notification.objects.filter(type=Notification.Type.RESERVATION_REQUEST).values_list("user__email", flat=True)
        )
        self.assertEqual(notified, {self.porteiro.email, self.zelador.email, self.sindico.email})

    def test_no_notification_without_approval_or_on_cancel(self) -> None:
        self.area.requires_approval = False
        self.area.save()

        with self.captureOnCommitCallbacks(execute=True):
            reservation = ReservationLedger().create(
                area_id=self.area.id, user=self.neighbour, date=self.day, time_slot="14-18"
            )
            ReservationLedger().cancel(reservation.id, self.neighbour)

        self.assertFalse(Notification.objects.exists())
