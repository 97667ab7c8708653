"""Area catalog: creation, partial updates and soft deletion of areas."""

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.exceptions import (
    DuplicateNameError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

from .domain import AreaRules, normalize_days, normalize_slots
from .models import Area
from .policies import can_manage_areas

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset, of=()):
    """
    Apply select_for_update when inside transaction.atomic().

    ``of`` limits the lock to the named relations (``"self"`` for the
    queryset's own table) when rows are joined through select_related.
    """

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update(of=of)
    except NotSupportedError:
        return queryset


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Nome é obrigatório.")
    return name


def _ensure_name_is_free(condominium_id: int, name: str, *, exclude_area_id: int | None = None) -> None:
    duplicates = Area.active.filter(condominium_id=condominium_id, name=name)
    if exclude_area_id is not None:
        duplicates = duplicates.exclude(pk=exclude_area_id)
    if duplicates.exists():
        raise DuplicateNameError(name=name)


class AreaCatalog:
    """Owns area definitions and their rule sets."""

    def list_areas(self, condominium_id: int | None = None):
        queryset = Area.active.select_related("condominium").order_by("name")
        if condominium_id is not None:
            queryset = queryset.filter(condominium_id=condominium_id)
        return queryset

    def get_area(self, area_id: Any) -> Area:
        """Fetch an area regardless of its active flag (administration views)."""
        try:
            return Area.objects.select_related("condominium").get(pk=area_id)
        except (Area.DoesNotExist, ValueError, TypeError):
            raise NotFoundError("Área não encontrada.")

    def get_bookable_area(self, area_id: Any, *, lock: bool = False) -> Area:
        """
        Fetch an active area.

        With ``lock=True`` inside a transaction the area row is locked so
        concurrent bookings of the same area are serialised.
        """
        try:
            area_id = int(area_id)
        except (TypeError, ValueError):
            raise ValidationError("Identificador de área inválido.", field="areaId")

        queryset = Area.active.filter(pk=area_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            return queryset.get()
        except Area.DoesNotExist:
            raise NotFoundError("Área não encontrada.")

    def create_area(
        self,
        *,
        actor,
        condominium_id: int,
        name: str,
        description: str = "",
        image_url: str = "",
        rules: dict[str, Any] | None = None,
        available_slots: list[str] | None = None,
        available_days: list[int] | None = None,
    ) -> Area:
        if not can_manage_areas(actor, condominium_id):
            raise PermissionDeniedError("Apenas zelador ou síndico podem cadastrar áreas.")

        name = _clean_name(name)
        area_rules = AreaRules().merged(rules)
        area = Area(
            condominium_id=condominium_id,
            name=name,
            description=description or "",
            image_url=image_url or "",
            available_slots=normalize_slots(available_slots),
            available_days=normalize_days(available_days),
        )
        area.apply_rules(area_rules)

        with transaction.atomic():
            _ensure_name_is_free(condominium_id, name)
            try:
                with transaction.atomic():
                    area.save()
            except IntegrityError:
                raise DuplicateNameError(name=name)

        logger.info(f"Area {area.pk} '{area.name}' created in condominium {condominium_id} by user {actor.pk}")
        return area

    def update_area(self, area: Area, *, actor, **changes: Any) -> Area:
        """
        Apply a partial update.

        ``rules`` is merged into the current rule set, so sub-fields that
        are not given keep their values.
        """
        if not can_manage_areas(actor, area.condominium_id):
            raise PermissionDeniedError("Apenas zelador ou síndico podem alterar áreas.")

        update_fields: set[str] = set()

        if "name" in changes:
            area.name = _clean_name(changes["name"])
            update_fields.add("name")
        for field_name in ("description", "image_url"):
            if field_name in changes:
                setattr(area, field_name, changes[field_name] or "")
                update_fields.add(field_name)
        if "rules" in changes:
            merged = area.rules.merged(changes["rules"])
            area.apply_rules(merged)
            update_fields.update(merged.as_dict())
        if "available_slots" in changes:
            area.available_slots = normalize_slots(changes["available_slots"])
            update_fields.add("available_slots")
        if "available_days" in changes:
            area.available_days = normalize_days(changes["available_days"])
            update_fields.add("available_days")
        if "is_active" in changes:
            area.is_active = bool(changes["is_active"])
            update_fields.add("is_active")

        if not update_fields:
            return area

        with transaction.atomic():
            if area.is_active and update_fields & {"name", "is_active"}:
                _ensure_name_is_free(area.condominium_id, area.name, exclude_area_id=area.pk)
            try:
                with transaction.atomic():
                    area.save(update_fields=[*update_fields, "updated_at"])
            except IntegrityError:
                raise DuplicateNameError(name=area.name)

        logger.info(f"Area {area.pk} updated by user {actor.pk}: {sorted(update_fields)}")
        return area

    def deactivate_area(self, area: Area, *, actor) -> Area:
        """Soft delete: historical reservations keep pointing at the area."""
        if not can_manage_areas(actor, area.condominium_id):
            raise PermissionDeniedError("Apenas zelador ou síndico podem remover áreas.")
        if area.is_active:
            area.is_active = False
            area.save(update_fields=["is_active", "updated_at"])
            logger.info(f"Area {area.pk} deactivated by user {actor.pk}")
        return area


area_catalog = AreaCatalog()
