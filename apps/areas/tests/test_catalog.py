"""Area catalog service."""

from __future__ import annotations

import pytest

from apps.areas.models import Area
from apps.areas.services import AreaCatalog
from apps.users.models import Condominium, User
from shared.domain.exceptions import DuplicateNameError, NotFoundError, PermissionDeniedError


@pytest.fixture
def condominium():
    return Condominium.objects.create(name="Residencial Jardins")


@pytest.fixture
def sindico(condominium):
    return User.objects.create_user(
        email="sindico@example.com", password="x", role=User.RoleChoices.SINDICO, condominium=condominium
    )


@pytest.fixture
def catalog():
    return AreaCatalog()


@pytest.mark.django_db
def test_create_area_with_defaults(catalog, sindico, condominium):
    area = catalog.create_area(actor=sindico, condominium_id=condominium.id, name="Churrasqueira")

    assert area.available_slots == ["08:00 - 12:00", "14:00 - 18:00", "19:00 - 23:00"]
    assert area.available_days == [0, 1, 2, 3, 4, 5, 6]
    assert area.max_reservations_per_day == 1
    assert area.requires_approval is True


@pytest.mark.django_db
def test_duplicate_name_only_among_active_areas(catalog, sindico, condominium):
    area = catalog.create_area(actor=sindico, condominium_id=condominium.id, name="Quadra")

    with pytest.raises(DuplicateNameError):
        catalog.create_area(actor=sindico, condominium_id=condominium.id, name="Quadra")

    catalog.deactivate_area(area, actor=sindico)
    replacement = catalog.create_area(actor=sindico, condominium_id=condominium.id, name="Quadra")

    assert replacement.pk != area.pk
    with pytest.raises(DuplicateNameError):
        catalog.update_area(area, actor=sindico, is_active=True)


@pytest.mark.django_db
def test_update_merges_rules(catalog, sindico, condominium):
    area = catalog.create_area(
        actor=sindico,
        condominium_id=condominium.id,
        name="Salão",
        rules={"max_reservations_per_day": 3, "cancellation_deadline_hours": 48},
    )

    catalog.update_area(area, actor=sindico, rules={"requires_approval": False})
    area.refresh_from_db()

    assert area.max_reservations_per_day == 3
    assert area.cancellation_deadline_hours == 48
    assert area.requires_approval is False


@pytest.mark.django_db
def test_only_area_admins_of_the_condominium(catalog, condominium):
    porteiro = User.objects.create_user(
        email="porteiro@example.com", password="x", role=User.RoleChoices.PORTEIRO, condominium=condominium
    )
    other = Condominium.objects.create(name="Outro")
    foreign_sindico = User.objects.create_user(
        email="sindico@outro.example.com", password="x", role=User.RoleChoices.SINDICO, condominium=other
    )

    with pytest.raises(PermissionDeniedError):
        catalog.create_area(actor=porteiro, condominium_id=condominium.id, name="Piscina")
    with pytest.raises(PermissionDeniedError):
        catalog.create_area(actor=foreign_sindico, condominium_id=condominium.id, name="Piscina")
    assert not Area.objects.exists()


@pytest.mark.django_db
def test_inactive_area_is_not_bookable(catalog, sindico, condominium):
    area = catalog.create_area(actor=sindico, condominium_id=condominium.id, name="Sauna")
    catalog.deactivate_area(area, actor=sindico)

    with pytest.raises(NotFoundError):
        catalog.get_bookable_area(area.id)
    assert list(catalog.list_areas(condominium.id)) == []
