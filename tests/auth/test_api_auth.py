"""API Tests with authentication enabled"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ipam.api import create_app
from ipam.auth import create_authenticator
from ipam.config import Settings
from ipam.infrastructure.persistence.memory import InMemoryHealthChecker
from ipam.routes.dependencies import init_services, reset_services


@pytest_asyncio.fixture
async def secured_client(auth_config, jwks_endpoint, memory_service):
    http_client = jwks_endpoint.client()
    authenticator = await create_authenticator(auth_config, http_client=http_client)
    init_services(memory_service, InMemoryHealthChecker(), authenticator)

    app = create_app(Settings(storage_backend="memory"))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    reset_services()
    await authenticator.aclose()
    await http_client.aclose()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestAuthenticatedAPI:
    @pytest.mark.asyncio
    async def test_no_token(self, secured_client):
        response = await secured_client.get("/api/v1/subnets")

        assert response.status_code == 401
        assert response.json() == {"error": "missing token"}

    @pytest.mark.asyncio
    async def test_untrusted_key(self, secured_client, token_factory, untrusted_key):
        response = await secured_client.get(
            "/api/v1/subnets", headers=bearer(token_factory(key=untrusted_key))
        )

        assert response.status_code == 401
        assert response.json() == {"error": "invalid token"}

    @pytest.mark.asyncio
    async def test_wrong_audience(self, secured_client, token_factory):
        response = await secured_client.get(
            "/api/v1/subnets", headers=bearer(token_factory(audience="another-api"))
        )

        assert response.status_code == 401
        assert response.json() == {"error": "invalid token"}

    @pytest.mark.asyncio
    async def test_valid_token(self, secured_client, token_factory):
        headers = bearer(token_factory())

        response = await secured_client.post(
            "/api/v1/subnets", json={"cidr": "10.42.0.0/24"}, headers=headers
        )
        assert response.status_code == 201

        response = await secured_client.get("/api/v1/subnets", headers=headers)
        assert response.status_code == 200
        assert [s["cidr"] for s in response.json()] == ["10.42.0.0/24"]

    @pytest.mark.asyncio
    async def test_probes_stay_public(self, secured_client):
        assert (await secured_client.get("/healthz")).status_code == 200
        assert (await secured_client.get("/readyz")).status_code == 200
        assert (await secured_client.get("/openapi.json")).status_code == 200
