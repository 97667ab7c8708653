"""Serializers for the reservations API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Reservation


class ReservationAreaSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    fee = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    requiresApproval = serializers.BooleanField(source="requires_approval", read_only=True)
    cancellationDeadlineHours = serializers.IntegerField(source="cancellation_deadline_hours", read_only=True)


class DeciderSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source="display_name", read_only=True)


class ReservationSerializer(serializers.ModelSerializer):
    area = ReservationAreaSerializer(read_only=True)
    user = UserSummarySerializer(read_only=True)
    timeSlot = serializers.CharField(source="time_slot", read_only=True)
    statusLabel = serializers.SerializerMethodField()
    approvedBy = DeciderSerializer(source="approved_by", read_only=True)
    approvedAt = serializers.DateTimeField(source="approved_at", read_only=True)
    rejectionReason = serializers.CharField(source="rejection_reason", read_only=True)
    canceledAt = serializers.DateTimeField(source="canceled_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "area",
            "user",
            "date",
            "timeSlot",
            "status",
            "statusLabel",
            "approvedBy",
            "approvedAt",
            "rejectionReason",
            "canceledAt",
            "createdAt",
        ]
        read_only_fields = fields

    def get_statusLabel(self, obj: Reservation) -> str:  # noqa: N802
        return obj.current_status.label


class ReservationCreateSerializer(serializers.Serializer):
    """Raw booking input; the ledger validates and normalizes it."""

    areaId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    timeSlot = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=True)


class ReservationRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


class CalendarEntrySerializer(serializers.ModelSerializer):
    timeSlot = serializers.CharField(source="time_slot", read_only=True)
    user = serializers.SerializerMethodField()

    class Meta:
        model = Reservation
        fields = ["id", "timeSlot", "status", "user"]
        read_only_fields = fields

    def get_user(self, obj: Reservation):
        if obj.user is None:
            return None
        return {"name": obj.user.display_name, "unit": obj.user.unit_label, "phone": obj.user.phone}
