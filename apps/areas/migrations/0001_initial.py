import apps.areas.models
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Area",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120, verbose_name="Nome")),
                ("description", models.TextField(blank=True, verbose_name="Descrição")),
                ("image_url", models.URLField(blank=True, max_length=500, verbose_name="Imagem")),
                (
                    "max_reservations_per_day",
                    models.PositiveSmallIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "capacity",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Lotação máxima de pessoas (opcional).",
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Taxa de uso. Apenas informativa, não é cobrada.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "fee_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("cancellation_deadline_hours", models.PositiveIntegerField(default=24)),
                ("min_advance_booking_hours", models.PositiveIntegerField(default=24)),
                (
                    "max_advance_booking_days",
                    models.PositiveIntegerField(default=30, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("requires_approval", models.BooleanField(default=True)),
                ("available_slots", models.JSONField(default=apps.areas.models.default_available_slots)),
                (
                    "available_days",
                    models.JSONField(
                        default=apps.areas.models.default_available_days,
                        help_text="Dias da semana liberados: 0 = domingo ... 6 = sábado.",
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "condominium",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="areas",
                        to="users.condominium",
                    ),
                ),
            ],
            options={
                "verbose_name": "Área comum",
                "verbose_name_plural": "Áreas comuns",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["condominium", "is_active"], name="areas_area_condomi_3f1c2a_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True)),
                        fields=("condominium", "name"),
                        name="unique_active_area_name_per_condominium",
                    )
                ],
            },
        ),
    ]
