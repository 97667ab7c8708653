"""URL declarations for the areas app."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AreaViewSet

router = DefaultRouter()
router.register(r"", AreaViewSet, basename="area")

urlpatterns = [
    path("", include(router.urls)),
]
