"""Integration tests for the read-only auditor role on the order endpoints.

Auditors are bakery staff (INTERNAL) who may read every order but neither
create orders nor change their status or contents.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderStatusHistory

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"


@pytest.fixture()
def pending(customer_client):
    created = customer_client.post(ORDERS_URL, {"notes": "20 sonhos"}, format="json")
    order_id = created.data["id"]
    response = customer_client.post(
        f"{ORDERS_URL}{order_id}/status/", {"status": "PENDING"}, format="json"
    )
    assert response.status_code == 200
    return response.data


@pytest.mark.parametrize("target", ["CONFIRMED", "CANCELLED"])
def test_auditor_cannot_change_status(auditor_client, pending, target):
    response = auditor_client.post(
        f"{ORDERS_URL}{pending['id']}/status/", {"status": target}, format="json"
    )

    assert response.status_code == 403
    assert Order.objects.get(id=pending["id"]).status == OrderStatus.PENDING
    assert not OrderStatusHistory.objects.filter(
        order_id=pending["id"], new_status=target
    ).exists()


def test_auditor_cannot_create(auditor_client):
    response = auditor_client.post(
        ORDERS_URL, {"customer_id": str(uuid4())}, format="json"
    )
    assert response.status_code == 403
    assert Order.objects.count() == 0


def test_auditor_cannot_edit_notes(auditor_client, pending):
    response = auditor_client.patch(
        f"{ORDERS_URL}{pending['id']}/", {"notes": "alterado"}, format="json"
    )
    assert response.status_code == 403
    assert Order.objects.get(id=pending["id"]).notes == "20 sonhos"


def test_auditor_reads_orders(auditor_client, pending):
    assert auditor_client.get(f"{ORDERS_URL}{pending['id']}/").status_code == 200
    listing = auditor_client.get(ORDERS_URL)
    assert listing.status_code == 200
    assert [o["id"] for o in listing.data["results"]] == [pending["id"]]


def test_auditor_gets_no_buttons(auditor_client, pending):
    response = auditor_client.get(f"{ORDERS_URL}{pending['id']}/transitions/")
    assert response.status_code == 200
    assert response.data["role"] == "INTERNAL"
    assert response.data["actions"] == []
    assert response.data["can_edit"] is False


def test_staff_with_write_role_still_confirms(operator_client, pending):
    response = operator_client.post(
        f"{ORDERS_URL}{pending['id']}/status/", {"status": "CONFIRMED"}, format="json"
    )
    assert response.status_code == 200
    assert response.data["status"] == "CONFIRMED"
