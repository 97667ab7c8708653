"""API views for areas."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.reservations.application.availability import availability_calculator, reservation_calendar
from apps.reservations.serializers import CalendarEntrySerializer
from apps.users.permissions import IsAreaAdminOrReadOnly
from shared.domain.exceptions import NotFoundError, ValidationError

from .models import Area
from .policies import can_view_area
from .serializers import AreaSerializer, AreaWriteSerializer, AvailabilityQuerySerializer, serialize_day
from .services import area_catalog


class AreaViewSet(viewsets.GenericViewSet):
    """Áreas comuns do condomínio do usuário."""

    queryset = Area.objects.select_related("condominium").all()
    serializer_class = AreaSerializer
    permission_classes = [permissions.IsAuthenticated, IsAreaAdminOrReadOnly]

    def _condominium_scope(self) -> int | None:
        user = self.request.user
        if user.is_master():
            raw = self.request.query_params.get("condominium")
            if raw in (None, ""):
                return None
            try:
                return int(raw)
            except ValueError:
                raise ValidationError("Condomínio inválido.", field="condominium")
        return user.condominium_id

    def _get_area(self, pk) -> Area:
        area = area_catalog.get_area(pk)
        if not can_view_area(self.request.user, area):
            raise NotFoundError("Área não encontrada.")
        return area

    def _active_area(self, pk) -> Area:
        area = self._get_area(pk)
        if not area.is_active:
            raise NotFoundError("Área não encontrada.")
        return area

    def list(self, request, *args, **kwargs):  # type: ignore
        condominium_id = self._condominium_scope()
        if condominium_id is None and not request.user.is_master():
            return Response([])
        areas = area_catalog.list_areas(condominium_id)
        return Response(AreaSerializer(areas, many=True).data)

    def retrieve(self, request, pk=None, *args, **kwargs):  # type: ignore
        return Response(AreaSerializer(self._get_area(pk)).data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = AreaWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        condominium_id = data.pop("condominium_id", None)
        if not request.user.is_master() or condominium_id is None:
            condominium_id = request.user.condominium_id
        if condominium_id is None:
            raise ValidationError("Condomínio é obrigatório.", field="condominiumId")
        data.pop("is_active", None)

        area = area_catalog.create_area(actor=request.user, condominium_id=condominium_id, **data)
        return Response(AreaSerializer(area).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        area = self._get_area(pk)
        serializer = AreaWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        changes.pop("condominium_id", None)

        area = area_catalog.update_area(area, actor=request.user, **changes)
        return Response(AreaSerializer(area).data)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        kwargs["partial"] = True
        return self.update(request, *args, **kwargs)

    def destroy(self, request, pk=None, *args, **kwargs):  # type: ignore
        area_catalog.deactivate_area(self._active_area(pk), actor=request.user)
        return Response({"message": "Área removida com sucesso"}, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):
        area = self._active_area(pk)
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        month_view = availability_calculator.month_for(
            area,
            query.validated_data.get("month"),
            query.validated_data.get("year"),
        )
        first_day = next(iter(month_view))
        return Response(
            {
                "area": {
                    "id": area.id,
                    "name": area.name,
                    "availableSlots": area.available_slots,
                    "availableDays": area.available_days,
                    "rules": AreaSerializer(area).data["rules"],
                },
                "month": first_day.month,
                "year": first_day.year,
                "availability": {day.isoformat(): serialize_day(info) for day, info in month_view.items()},
            }
        )

    @action(detail=True, methods=["get"])
    def calendar(self, request, pk=None):
        area = self._get_area(pk)
        grouped = reservation_calendar(
            area,
            request.user,
            request.query_params.get("startDate"),
            request.query_params.get("endDate"),
        )
        return Response(
            {day.isoformat(): CalendarEntrySerializer(entries, many=True).data for day, entries in grouped.items()}
        )
