"""User API views."""

from __future__ import annotations

import logging

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .serializers import PushTokenSerializer, UserSerializer

logger = logging.getLogger(__name__)


class MeView(APIView):
    """Perfil do usuário autenticado."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)


class PushTokenView(APIView):
    """Registra o token de push do aparelho do usuário."""

    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):  # type: ignore
        serializer = PushTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request.user.push_token = serializer.validated_data["push_token"]
        request.user.save(update_fields=["push_token"])
        logger.info(f"Push token updated for user {request.user.pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)
