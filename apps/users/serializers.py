"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Condominium

User = get_user_model()


class CondominiumShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Condominium
        fields = ["id", "name"]


class UserSerializer(serializers.ModelSerializer):
    """Perfil do usuário autenticado."""

    condominium = CondominiumShortSerializer(read_only=True)
    unit = serializers.CharField(source="unit_label", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "condominium",
            "unit",
            "created_at",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Dados do morador embutidos em reservas e calendários."""

    name = serializers.CharField(source="display_name", read_only=True)
    unit = serializers.CharField(source="unit_label", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "unit", "phone"]
        read_only_fields = fields


class PushTokenSerializer(serializers.Serializer):
    push_token = serializers.CharField(max_length=255, allow_blank=True)
