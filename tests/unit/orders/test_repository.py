"""Unit tests for OrderDjangoRepository.

Covers:
- Draft creation.
- Reads skip soft-deleted rows and tolerate malformed IDs.
- Locked read inside a transaction.
- Lazy, filterable listing.
- History entries.
"""

from __future__ import annotations

from unittest.mock import patch
from uuid import uuid4

import pytest
from django.db import transaction
from django.db.models import QuerySet

from modules.core.models import SoftDeleteQuerySet
from modules.orders.constants import ActorRole, OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return OrderDjangoRepository()


@pytest.fixture()
def order(repo):
    return repo.create({"customer_id": uuid4(), "notes": "pão de queijo"})


def test_implements_interface(repo):
    assert isinstance(repo, IOrderRepository)


def test_create_defaults_to_draft(order):
    assert order.status == OrderStatus.DRAFT
    assert order.notes == "pão de queijo"
    assert order.order_number


def test_get_by_id(repo, order):
    found = repo.get_by_id(str(order.id))
    assert found.id == order.id


@pytest.mark.parametrize("bad_id", ["not-a-uuid", "", "123"])
def test_get_by_id_malformed(repo, bad_id):
    assert repo.get_by_id(bad_id) is None


def test_get_by_id_missing(repo):
    assert repo.get_by_id(str(uuid4())) is None


def test_get_by_id_skips_soft_deleted(repo, order):
    order.delete()
    assert repo.get_by_id(str(order.id)) is None


def test_get_for_update(repo, order):
    with transaction.atomic():
        locked = repo.get_for_update(str(order.id))
    assert locked.id == order.id


def test_get_for_update_requests_row_lock(repo, order):
    with patch.object(
        SoftDeleteQuerySet,
        "select_for_update",
        autospec=True,
        side_effect=QuerySet.select_for_update,
    ) as select_for_update:
        with transaction.atomic():
            assert repo.get_for_update(str(order.id)) == order
    select_for_update.assert_called_once()


def test_get_by_id_does_not_lock(repo, order):
    with patch.object(
        SoftDeleteQuerySet, "select_for_update", autospec=True
    ) as select_for_update:
        repo.get_by_id(str(order.id))
    select_for_update.assert_not_called()


def test_get_for_update_malformed(repo):
    with transaction.atomic():
        assert repo.get_for_update("nope") is None


def test_list_is_filterable(repo, order):
    repo.create({"customer_id": uuid4()})
    assert repo.list().count() == 2
    assert list(repo.list({"customer_id": order.customer_id})) == [order]
    assert repo.list({"status": OrderStatus.DELIVERED}).count() == 0


def test_list_skips_soft_deleted(repo, order):
    order.delete()
    assert repo.list().count() == 0


def test_save_persists_status(repo, order):
    order.status = OrderStatus.PENDING
    repo.save(order)
    assert Order.objects.get(id=order.id).status == OrderStatus.PENDING


def test_add_history(repo, order):
    entry = repo.add_history(
        order_id=order.id,
        status=OrderStatus.PENDING,
        notes="Enviado",
        old_status=OrderStatus.DRAFT,
        actor_role=ActorRole.CUSTOMER,
    )
    assert entry.order_id == order.id
    assert entry.new_status == OrderStatus.PENDING
    assert entry.old_status == OrderStatus.DRAFT
    assert entry.actor_role == ActorRole.CUSTOMER
    assert entry.user_id is None
    assert order.status_history.count() == 1
