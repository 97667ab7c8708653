"""Area models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import DEFAULT_AVAILABLE_DAYS, DEFAULT_AVAILABLE_SLOTS, AreaRules


def default_available_slots() -> list[str]:
    return list(DEFAULT_AVAILABLE_SLOTS)


def default_available_days() -> list[int]:
    return list(DEFAULT_AVAILABLE_DAYS)


class ActiveAreaManager(models.Manager):
    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(is_active=True)


class Area(models.Model):
    """Área comum reservável (salão de festas, churrasqueira, quadra...)."""

    condominium = models.ForeignKey(
        "users.Condominium",
        on_delete=models.CASCADE,
        related_name="areas",
    )
    name = models.CharField(_("Nome"), max_length=120)
    description = models.TextField(_("Descrição"), blank=True)
    image_url = models.URLField(_("Imagem"), max_length=500, blank=True)

    max_reservations_per_day = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    capacity = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text=_("Lotação máxima de pessoas (opcional)."),
    )
    fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Taxa de uso. Apenas informativa, não é cobrada."),
    )
    fee_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    cancellation_deadline_hours = models.PositiveIntegerField(default=24)
    min_advance_booking_hours = models.PositiveIntegerField(default=24)
    max_advance_booking_days = models.PositiveIntegerField(
        default=30,
        validators=[MinValueValidator(1)],
    )
    requires_approval = models.BooleanField(default=True)

    available_slots = models.JSONField(default=default_available_slots)
    available_days = models.JSONField(
        default=default_available_days,
        help_text=_("Dias da semana liberados: 0 = domingo ... 6 = sábado."),
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager()
    active = ActiveAreaManager()

    class Meta:
        verbose_name = _("Área comum")
        verbose_name_plural = _("Áreas comuns")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["condominium", "name"],
                condition=Q(is_active=True),
                name="unique_active_area_name_per_condominium",
            ),
        ]
        indexes = [
            models.Index(fields=["condominium", "is_active"], name="areas_area_condomi_3f1c2a_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def rules(self) -> AreaRules:
        return AreaRules(
            max_reservations_per_day=self.max_reservations_per_day,
            capacity=self.capacity,
            fee=self.fee,
            fee_percentage=self.fee_percentage,
            cancellation_deadline_hours=self.cancellation_deadline_hours,
            min_advance_booking_hours=self.min_advance_booking_hours,
            max_advance_booking_days=self.max_advance_booking_days,
            requires_approval=self.requires_approval,
        )

    def apply_rules(self, rules: AreaRules) -> None:
        for field_name, value in rules.as_dict().items():
            setattr(self, field_name, value)

    def has_slot(self, label: str) -> bool:
        return label in (self.available_slots or [])
