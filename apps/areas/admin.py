"""Admin registration for areas."""

from __future__ import annotations

from django.contrib import admin

from .models import Area


@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "condominium",
        "max_reservations_per_day",
        "requires_approval",
        "cancellation_deadline_hours",
        "fee",
        "is_active",
    )
    list_filter = ("is_active", "requires_approval", "condominium")
    search_fields = ("name", "condominium__name")
    readonly_fields = ("created_at", "updated_at")
