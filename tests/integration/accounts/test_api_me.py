"""Integration tests for authentication and GET /api/v1/me."""

import pytest

pytestmark = pytest.mark.integration

ME_URL = "/api/v1/me"


class TestProtectedEndpoints:
    """DRF endpoints require a valid JWT by default (Fail Closed)."""

    def test_no_token_returns_401(self, api_client):
        response = api_client.get(ME_URL)
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        assert api_client.get(ME_URL).status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        assert api_client.get(ME_URL).status_code == 401


class TestJwtFlow:
    def test_token_pair_grants_access(self, api_client, customer_user, customer_id):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "cliente", "password": "s3cret-pass"},
            format="json",
        )
        assert response.status_code == 200
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")

        me = api_client.get(ME_URL)
        assert me.status_code == 200
        assert me.data == {
            "username": "cliente",
            "role": "CLIENTE_USUARIO",
            "role_class": "CUSTOMER",
            "customer_id": str(customer_id),
        }

    def test_wrong_password(self, api_client, customer_user):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "cliente", "password": "errada"},
            format="json",
        )
        assert response.status_code == 401


class TestMe:
    def test_staff(self, operator_client):
        data = operator_client.get(ME_URL).data
        assert data["role"] == "OPERADOR_PEDIDOS"
        assert data["role_class"] == "INTERNAL"
        assert data["customer_id"] is None

    def test_user_without_profile(self, make_user, api_client):
        api_client.force_authenticate(user=make_user("sem-perfil"))
        data = api_client.get(ME_URL).data
        assert data["role"] is None
        assert data["role_class"] is None

    def test_auditor_is_read_only(self, auditor_client):
        data = auditor_client.get(ME_URL).data
        assert data["role"] == "AUDITOR_READONLY"
        assert data["role_class"] == "INTERNAL"
        assert data["role_level"] == 40
        assert data["can_write"] is False

    def test_writer_level(self, customer_client):
        data = customer_client.get(ME_URL).data
        assert data["role_level"] == 20
        assert data["can_write"] is True
