from uuid import uuid4

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.accounts.models import UserProfile
from modules.accounts.roles import RoleCode
from modules.accounts.services import resolve_actor
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from shared.infrastructure.bus import InMemoryEventBus


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users and actors
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer_id():
    """Tenant key of the customer the customer users belong to."""
    return uuid4()


@pytest.fixture()
def make_user():
    """Factory: ``make_user(username, role, customer_id=None)``."""

    def _make(username, role=None, customer_id=None):
        user = get_user_model().objects.create_user(
            username=username, password="s3cret-pass"
        )
        if role is not None:
            UserProfile.objects.create(user=user, role=role, customer_id=customer_id)
        return user

    return _make


@pytest.fixture()
def operator_user(make_user):
    return make_user("operador", RoleCode.OPERADOR_PEDIDOS)


@pytest.fixture()
def customer_user(make_user, customer_id):
    return make_user("cliente", RoleCode.CLIENTE_USUARIO, customer_id)


@pytest.fixture()
def other_customer_user(make_user):
    return make_user("outro-cliente", RoleCode.CLIENTE_ADMIN, uuid4())


@pytest.fixture()
def auditor_user(make_user):
    return make_user("auditor", RoleCode.AUDITOR_READONLY)


@pytest.fixture()
def internal_actor(operator_user):
    return resolve_actor(operator_user)


@pytest.fixture()
def customer_actor(customer_user):
    return resolve_actor(customer_user)


@pytest.fixture()
def auditor_actor(auditor_user):
    return resolve_actor(auditor_user)


# ---------------------------------------------------------------------------
# Service and API clients
# ---------------------------------------------------------------------------


@pytest.fixture()
def bus():
    return InMemoryEventBus()


@pytest.fixture()
def service(bus):
    return OrderService(order_repository=OrderDjangoRepository(), event_bus=bus)


@pytest.fixture()
def operator_client(operator_user):
    client = APIClient()
    client.force_authenticate(user=operator_user)
    return client


@pytest.fixture()
def customer_client(customer_user):
    client = APIClient()
    client.force_authenticate(user=customer_user)
    return client


@pytest.fixture()
def other_customer_client(other_customer_user):
    client = APIClient()
    client.force_authenticate(user=other_customer_user)
    return client


@pytest.fixture()
def auditor_client(auditor_user):
    client = APIClient()
    client.force_authenticate(user=auditor_user)
    return client
