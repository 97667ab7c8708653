"""Serializers for the login flow."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers  # type: ignore

from .models import User


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.select_related("condominium").get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Email ou senha inválidos."})

        if not user.is_active or not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"email": "Email ou senha inválidos."})

        attrs["user"] = user
        return attrs
