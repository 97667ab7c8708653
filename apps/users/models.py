"""User domain models for the condominium platform.

Only what the booking subsystem consumes lives here: the condominium a
user belongs to and the user's role. Residents (``morador``) book areas;
doormen, caretakers and the building manager (``porteiro``, ``zelador``,
``sindico``) review requests; ``master`` is the platform administrator
that is not bound to a single condominium.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{10,15}$",
    message=_("Telefone inválido. Use apenas dígitos, com DDD."),
)


class CustomUserManager(BaseUserManager):
    """Gerenciador de usuários que usa o email como login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email é obrigatório para criar um usuário.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.MORADOR)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.MASTER)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superusuário precisa de is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superusuário precisa de is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        return "".join(ch for ch in phone if ch.isdigit() or ch == "+")


class Condominium(models.Model):
    """Condomínio. Cadastro completo fica fora do módulo de reservas."""

    name = models.CharField(_("Nome"), max_length=255)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Condomínio")
        verbose_name_plural = _("Condomínios")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class CustomUser(AbstractUser):
    """Usuário da plataforma com papel e condomínio."""

    class RoleChoices(models.TextChoices):
        MORADOR = "morador", _("Morador")
        PORTEIRO = "porteiro", _("Porteiro")
        ZELADOR = "zelador", _("Zelador")
        SINDICO = "sindico", _("Síndico")
        MASTER = "master", _("Administrador master")

    MANAGER_ROLES = (RoleChoices.PORTEIRO, RoleChoices.ZELADOR, RoleChoices.SINDICO)
    AREA_ADMIN_ROLES = (RoleChoices.ZELADOR, RoleChoices.SINDICO)

    username = models.CharField(
        _("Nome de exibição"),
        max_length=150,
        blank=True,
    )
    email = models.EmailField(_("Email"), unique=True)
    phone = models.CharField(
        _("Telefone"),
        max_length=20,
        null=True,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    role = models.CharField(
        _("Papel"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.MORADOR,
    )
    condominium = models.ForeignKey(
        Condominium,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="users",
    )
    unit_block = models.CharField(_("Bloco"), max_length=20, blank=True)
    unit_number = models.CharField(_("Unidade"), max_length=20, blank=True)
    push_token = models.CharField(_("Token de push"), max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = _("Usuário")
        verbose_name_plural = _("Usuários")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    # --- Papéis ----------------------------------------------------------------
    def is_resident(self) -> bool:
        return self.role == self.RoleChoices.MORADOR

    def is_manager(self) -> bool:
        return self.role in self.MANAGER_ROLES

    def is_area_admin(self) -> bool:
        return self.role in self.AREA_ADMIN_ROLES

    def is_master(self) -> bool:
        return self.role == self.RoleChoices.MASTER or self.is_superuser

    def belongs_to(self, condominium_id: int | None) -> bool:
        return condominium_id is not None and self.condominium_id == condominium_id

    @property
    def display_name(self) -> str:
        full_name = self.get_full_name()
        return full_name or self.username or self.email

    @property
    def unit_label(self) -> str:
        if self.unit_block and self.unit_number:
            return f"{self.unit_block} - {self.unit_number}"
        return self.unit_number or ""


User = CustomUser
