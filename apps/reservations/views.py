"""API views for reservations."""

from __future__ import annotations

import logging

from django.http import HttpResponse  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsCondominiumManager
from shared.domain.exceptions import PermissionDeniedError, ValidationError

from .application.ledger import get_reservation, reservation_ledger
from .application.workflow import approval_workflow
from .domain.status import ReservationStatus
from .models import Reservation
from .policies import can_view_reservation
from .reports import build_report, render_csv
from .serializers import (
    ReservationCreateSerializer,
    ReservationRejectSerializer,
    ReservationSerializer,
)

logger = logging.getLogger(__name__)


def _status_filter(queryset, value):
    if not value:
        return queryset
    try:
        return queryset.filter(status=ReservationStatus(value).value)
    except ValueError:
        raise ValidationError("Status inválido.", field="status")


class ReservationViewSet(viewsets.GenericViewSet):
    """Criação, consulta, decisão e cancelamento de reservas."""

    queryset = Reservation.objects.select_related(
        "area", "area__condominium", "user", "approved_by"
    ).all()
    serializer_class = ReservationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_permissions(self):  # type: ignore
        if self.action in ("list", "pending"):
            return [permissions.IsAuthenticated(), IsCondominiumManager()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if user.is_master():
            condominium_id = self.request.query_params.get("condominium")
            return qs.for_condominium(condominium_id) if condominium_id else qs
        return qs.for_condominium(user.condominium_id)

    def _respond(self, reservation: Reservation, message: str | None = None, status_code=status.HTTP_200_OK):
        data = ReservationSerializer(reservation, context=self.get_serializer_context()).data
        if message:
            data = {"message": message, "reservation": data}
        return Response(data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = reservation_ledger.create(
            area_id=serializer.validated_data.get("areaId"),
            user=request.user,
            date=serializer.validated_data.get("date"),
            time_slot=serializer.validated_data.get("timeSlot"),
        )
        return self._respond(get_reservation(reservation.pk), status_code=status.HTTP_201_CREATED)

    def list(self, request, *args, **kwargs):  # type: ignore
        qs = _status_filter(self.get_queryset(), request.query_params.get("status"))
        qs = qs.order_by("-date", "-created_at")
        return Response(ReservationSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"])
    def pending(self, request):
        qs = self.get_queryset().filter(status=ReservationStatus.PENDENTE.value).order_by("date", "created_at")
        return Response(ReservationSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"])
    def my(self, request):
        qs = Reservation.objects.select_related("area", "user", "approved_by").filter(user=request.user)
        qs = _status_filter(qs, request.query_params.get("status")).order_by("-date", "-created_at")
        return Response(ReservationSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None, *args, **kwargs):  # type: ignore
        reservation = get_reservation(pk)
        if not can_view_reservation(request.user, reservation):
            raise PermissionDeniedError()
        return self._respond(reservation)

    @action(detail=True, methods=["post", "put"])
    def approve(self, request, pk=None):
        reservation = approval_workflow.approve(pk, request.user)
        return self._respond(get_reservation(reservation.pk), "Reserva aprovada com sucesso")

    @action(detail=True, methods=["post", "put"])
    def reject(self, request, pk=None):
        serializer = ReservationRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = approval_workflow.reject(pk, request.user, serializer.validated_data.get("reason"))
        return self._respond(get_reservation(reservation.pk), "Reserva rejeitada")

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        reservation = reservation_ledger.cancel(pk, request.user)
        return self._respond(get_reservation(reservation.pk), "Reserva cancelada com sucesso")

    def destroy(self, request, pk=None, *args, **kwargs):  # type: ignore
        return self.cancel(request, pk=pk)

    @action(detail=False, methods=["get"])
    def report(self, request):
        params = request.query_params
        report = build_report(
            request.user,
            params.get("startDate"),
            params.get("endDate"),
            status=params.get("status"),
            area_id=params.get("areaId"),
        )
        logger.info(f"Reservation report generated by user {request.user.pk}: {len(report.reservations)} rows")

        if params.get("export") == "csv":
            response = HttpResponse(render_csv(report), content_type="text/csv; charset=utf-8")
            response["Content-Disposition"] = f'attachment; filename="{report.filename}"'
            return response

        return Response(
            {
                "startDate": report.period.start_date,
                "endDate": report.period.end_date,
                "total": len(report.reservations),
                "countByStatus": report.count_by_status(),
                "totalFee": str(report.total_fee.amount),
                "currency": report.total_fee.currency,
                "reservations": ReservationSerializer(report.reservations, many=True).data,
            }
        )
