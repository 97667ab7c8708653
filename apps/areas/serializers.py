"""Serializers for the areas API (camelCase on the wire)."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Area


class AreaRulesSerializer(serializers.Serializer):
    """Rule set of an area. Every field is optional on write."""

    maxReservationsPerDay = serializers.IntegerField(source="max_reservations_per_day", min_value=1, required=False)
    capacity = serializers.IntegerField(min_value=1, allow_null=True, required=False)
    fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False)
    feePercentage = serializers.DecimalField(
        source="fee_percentage",
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        required=False,
    )
    cancellationDeadlineHours = serializers.IntegerField(
        source="cancellation_deadline_hours", min_value=0, required=False
    )
    minAdvanceBookingHours = serializers.IntegerField(source="min_advance_booking_hours", min_value=0, required=False)
    maxAdvanceBookingDays = serializers.IntegerField(source="max_advance_booking_days", min_value=1, required=False)
    requiresApproval = serializers.BooleanField(source="requires_approval", required=False)


class AreaSerializer(serializers.ModelSerializer):
    imageUrl = serializers.CharField(source="image_url", read_only=True)
    condominiumId = serializers.IntegerField(source="condominium_id", read_only=True)
    rules = AreaRulesSerializer(source="*", read_only=True)
    availableSlots = serializers.ListField(source="available_slots", child=serializers.CharField(), read_only=True)
    availableDays = serializers.ListField(source="available_days", child=serializers.IntegerField(), read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Area
        fields = [
            "id",
            "condominiumId",
            "name",
            "description",
            "imageUrl",
            "rules",
            "availableSlots",
            "availableDays",
            "isActive",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class AreaWriteSerializer(serializers.Serializer):
    """Input for create and (partial) update. Output goes through ``AreaSerializer``."""

    name = serializers.CharField(max_length=120)
    description = serializers.CharField(required=False, allow_blank=True)
    imageUrl = serializers.URLField(source="image_url", required=False, allow_blank=True, max_length=500)
    rules = AreaRulesSerializer(required=False)
    availableSlots = serializers.ListField(
        source="available_slots",
        child=serializers.CharField(max_length=100),
        required=False,
    )
    availableDays = serializers.ListField(
        source="available_days",
        child=serializers.IntegerField(min_value=0, max_value=6),
        required=False,
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    condominiumId = serializers.IntegerField(
        source="condominium_id",
        required=False,
        help_text="Apenas para o administrador master.",
    )


class AvailabilityQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=1, max_value=9999, required=False)


def serialize_day(day) -> dict:
    return {
        "available": day.available,
        "isDayAvailable": day.is_day_available,
        "isPastDate": day.is_past_date,
        "totalSlots": day.total_slots,
        "reservedSlots": day.reserved_slots,
        "availableSlots": day.available_slots,
        "freeSlots": list(day.free_labels),
        "reservations": [{"timeSlot": r.time_slot, "status": r.status} for r in day.reservations],
    }
