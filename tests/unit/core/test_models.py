"""Unit tests for BaseModel and SoftDeleteModel, exercised through the
concrete ``UserProfile`` (BaseModel) and ``Order`` (SoftDeleteModel).
"""

from __future__ import annotations

import uuid
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from freezegun import freeze_time

from modules.accounts.models import UserProfile
from modules.accounts.roles import RoleCode
from modules.core.models import SoftDeleteManager, SoftDeleteQuerySet
from modules.orders.models import Order

pytestmark = pytest.mark.unit


@pytest.fixture()
def profile():
    user = get_user_model().objects.create_user(username="base", password="x")
    return UserProfile.objects.create(user=user, role=RoleCode.FINANCEIRO)


class TestBaseModel:
    def test_id_is_uuid_version_7(self, profile):
        assert isinstance(profile.id, uuid.UUID)
        assert profile.id.version == 7

    def test_ids_are_time_ordered(self):
        a = Order.objects.create(customer_id=uuid.uuid4())
        b = Order.objects.create(customer_id=uuid.uuid4())
        assert str(a.id) < str(b.id)

    def test_id_is_not_editable(self):
        assert Order._meta.get_field("id").editable is False

    def test_update_fields_refreshes_updated_at(self, profile):
        with freeze_time(timezone.now() + timedelta(minutes=5)):
            profile.role = RoleCode.GERENTE_COMERCIAL
            profile.save(update_fields=["role"])
            expected = timezone.now()
        profile.refresh_from_db()
        assert profile.updated_at == expected
        assert profile.created_at < profile.updated_at


class TestSoftDeleteModel:
    def test_manager_and_queryset_types(self):
        assert isinstance(Order.objects, SoftDeleteManager)
        assert isinstance(Order.objects.all(), SoftDeleteQuerySet)

    def test_delete_twice_is_noop(self):
        order = Order.objects.create(customer_id=uuid.uuid4())
        assert order.delete() == (1, {"orders.Order": 1})
        assert order.delete() == (0, {})

    @freeze_time("2026-03-02 08:30:00")
    def test_delete_records_exact_timestamp(self):
        order = Order.objects.create(customer_id=uuid.uuid4())
        order.delete()
        order.refresh_from_db()
        assert order.deleted_at == timezone.now()

    def test_bulk_delete_skips_already_deleted(self):
        a = Order.objects.create(customer_id=uuid.uuid4())
        b = Order.objects.create(customer_id=uuid.uuid4())
        a.delete()
        count, _ = Order.objects.filter(pk__in=[a.pk, b.pk]).delete()
        assert count == 1

    def test_hard_delete_removes_row(self):
        order = Order.objects.create(customer_id=uuid.uuid4())
        order.hard_delete()
        assert not Order.objects.filter(pk=order.pk).exists()
