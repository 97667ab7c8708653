"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "area",
        "user",
        "date",
        "time_slot",
        "status",
        "approved_by",
        "created_at",
    )
    list_filter = ("status", "date", "area__condominium")
    search_fields = ("area__name", "user__email", "time_slot")
    readonly_fields = (
        "approved_by",
        "approved_at",
        "canceled_at",
        "created_at",
        "updated_at",
    )
    raw_id_fields = ("area", "user")
