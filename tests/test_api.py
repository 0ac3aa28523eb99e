"""API Tests

HTTP behaviour of the subnet and IP routes over the in-memory backend.
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ipam.api import create_app
from ipam.config import Settings
from ipam.core.exceptions import ConfigurationError
from ipam.core.interfaces import IHealthChecker, INetworkService
from ipam.routes.dependencies import (
    get_authenticator,
    get_health_checker,
    get_network_service,
    init_services,
    reset_services,
)

MISSING_IP_ID = "550e8400-e29b-41d4-a716-446655440000"


def memory_settings(**overrides) -> Settings:
    return Settings(storage_backend="memory", auth_enabled=False, **overrides)


@pytest_asyncio.fixture
async def client():
    """Client against an app started through its lifespan"""
    app = create_app(memory_settings())
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c


@pytest_asyncio.fixture
async def subnet(client) -> dict:
    response = await client.post("/api/v1/subnets", json={"cidr": "10.42.0.0/24"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def mock_network_service():
    service = AsyncMock(spec=INetworkService)
    health_checker = AsyncMock(spec=IHealthChecker)
    init_services(service, health_checker)
    yield service
    reset_services()


@pytest_asyncio.fixture
async def mocked_client(mock_network_service):
    app = create_app(memory_settings())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


class TestLifespan:
    @pytest.mark.asyncio
    async def test_services_initialized_and_released(self):
        app = create_app(memory_settings())

        async with app.router.lifespan_context(app):
            assert get_authenticator() is None
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                response = await client.get("/readyz")
                assert response.status_code == 200

        with pytest.raises(RuntimeError):
            get_network_service()

    @pytest.mark.asyncio
    async def test_postgres_requires_database_url(self):
        app = create_app(Settings(storage_backend="postgres", database_url=None))

        with pytest.raises(ConfigurationError):
            async with app.router.lifespan_context(app):
                pass


class TestHealth:
    @pytest.mark.asyncio
    async def test_healthz(self, client):
        response = await client.get("/healthz")

        assert response.status_code == 200
        assert response.text == "ok"

    @pytest.mark.asyncio
    async def test_readyz(self, client):
        response = await client.get("/readyz")

        assert response.status_code == 200
        assert response.text == "ready"

    @pytest.mark.asyncio
    async def test_readyz_storage_down(self, mocked_client):
        get_health_checker().ping.side_effect = ConnectionError("refused")

        response = await mocked_client.get("/readyz")

        assert response.status_code == 503
        assert response.text == "db unavailable"

    @pytest.mark.asyncio
    async def test_openapi_has_bearer_scheme(self, client):
        response = await client.get("/openapi.json")

        assert response.status_code == 200
        schemes = response.json()["components"]["securitySchemes"]
        assert schemes["HTTPBearer"]["scheme"] == "bearer"


class TestSubnetRoutes:
    @pytest.mark.asyncio
    async def test_create_and_get(self, client):
        response = await client.post(
            "/api/v1/subnets", json={"cidr": "10.0.0.0/24", "description": "Office"}
        )

        assert response.status_code == 201
        created = response.json()
        assert created["cidr"] == "10.0.0.0/24"
        assert created["description"] == "Office"

        response = await client.get(f"/api/v1/subnets/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_list(self, client, subnet):
        response = await client.get("/api/v1/subnets")

        assert response.status_code == 200
        assert response.json() == [subnet]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "cidr", ["10.0.0.0", "10.0.0.1/24", "10.0.0.0/255.255.255.0", "banana"]
    )
    async def test_invalid_cidr(self, client, cidr):
        response = await client.post("/api/v1/subnets", json={"cidr": cidr})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid cidr"}

    @pytest.mark.asyncio
    async def test_missing_cidr(self, client):
        response = await client.post("/api/v1/subnets", json={"description": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

    @pytest.mark.asyncio
    async def test_undecodable_body(self, client):
        response = await client.post(
            "/api/v1/subnets",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

    @pytest.mark.asyncio
    async def test_bad_path_id(self, client):
        response = await client.get("/api/v1/subnets/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

    @pytest.mark.asyncio
    async def test_path_id_beyond_bigint(self, client):
        too_large = 2**63

        response = await client.get(f"/api/v1/subnets/{too_large}")
        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

        response = await client.get(f"/api/v1/subnets/{too_large}/ips")
        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

        response = await client.get(f"/api/v1/subnets/{too_large - 1}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        response = await client.get("/api/v1/subnets/999")

        assert response.status_code == 404
        assert response.json() == {"error": "subnet not found"}

    @pytest.mark.asyncio
    async def test_delete_twice(self, client, subnet):
        response = await client.delete(f"/api/v1/subnets/{subnet['id']}")
        assert response.status_code == 204
        assert response.content == b""

        response = await client.delete(f"/api/v1/subnets/{subnet['id']}")
        assert response.status_code == 404
        assert response.json() == {"error": "subnet not found"}

    @pytest.mark.asyncio
    async def test_storage_failure_not_echoed(self, mocked_client, mock_network_service):
        mock_network_service.create_subnet.side_effect = RuntimeError("connection reset by peer")

        response = await mocked_client.post("/api/v1/subnets", json={"cidr": "10.0.0.0/24"})

        assert response.status_code == 500
        assert response.json() == {"error": "internal server error while saving subnet to db"}


class TestIPRoutes:
    @pytest.mark.asyncio
    async def test_ip_lifecycle(self, client, subnet):
        """Record, reject duplicate and foreign addresses, rename, delete"""
        base = f"/api/v1/subnets/{subnet['id']}/ips"

        response = await client.post(base, json={"ip": "10.42.0.10", "hostname": "printer"})
        assert response.status_code == 201
        ip = response.json()
        assert ip["ip"] == "10.42.0.10"
        assert ip["hostname"] == "printer"
        assert ip["subnet_id"] == subnet["id"]

        response = await client.post(base, json={"ip": "10.42.0.10"})
        assert response.status_code == 400
        assert response.json() == {"error": "bad request, ip exists"}

        response = await client.post(base, json={"ip": "10.43.0.10"})
        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

        response = await client.patch(f"{base}/{ip['id']}", json={"hostname": "pc-1"})
        assert response.status_code == 200
        assert response.json()["hostname"] == "pc-1"
        assert response.json()["id"] == ip["id"]

        response = await client.get(base)
        assert response.status_code == 200
        assert [i["hostname"] for i in response.json()] == ["pc-1"]

        response = await client.delete(f"{base}/{ip['id']}")
        assert response.status_code == 204

        response = await client.delete(f"{base}/{ip['id']}")
        assert response.status_code == 404
        assert response.json() == {"error": "subnet or ip not found"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("cidr", "address"),
        [
            ("10.42.0.0/24", ""),
            ("10.42.0.0/24", "10.42.0.0"),
            ("10.42.0.0/24", "10.42.0.255"),
            ("10.42.0.0/24", "not-an-ip"),
            ("10.42.0.5/32", "10.42.0.5"),
            ("fe80::/64", "fe80::10%eth0"),
        ],
    )
    async def test_rejected_addresses(self, client, cidr, address):
        response = await client.post("/api/v1/subnets", json={"cidr": cidr})
        subnet_id = response.json()["id"]

        response = await client.post(f"/api/v1/subnets/{subnet_id}/ips", json={"ip": address})

        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

    @pytest.mark.asyncio
    async def test_zoned_address_not_stored_beside_plain(self, client):
        response = await client.post("/api/v1/subnets", json={"cidr": "fe80::/64"})
        base = f"/api/v1/subnets/{response.json()['id']}/ips"

        response = await client.post(base, json={"ip": "fe80::10%eth0"})
        assert response.status_code == 400

        response = await client.post(base, json={"ip": "fe80::10"})
        assert response.status_code == 201

        response = await client.get(base)
        assert [i["ip"] for i in response.json()] == ["fe80::10"]

    @pytest.mark.asyncio
    async def test_subnet_missing(self, client):
        response = await client.post("/api/v1/subnets/999/ips", json={"ip": "10.0.0.1"})
        assert response.status_code == 404
        assert response.json() == {"error": "subnet not found"}

        response = await client.get("/api/v1/subnets/999/ips")
        assert response.status_code == 404
        assert response.json() == {"error": "subnet not found"}

        response = await client.patch(
            f"/api/v1/subnets/999/ips/{MISSING_IP_ID}", json={"hostname": "x"}
        )
        assert response.status_code == 404
        assert response.json() == {"error": "subnet not found"}

    @pytest.mark.asyncio
    async def test_update_missing_ip(self, client, subnet):
        response = await client.patch(
            f"/api/v1/subnets/{subnet['id']}/ips/{MISSING_IP_ID}", json={"hostname": "x"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "ip not found"}

    @pytest.mark.asyncio
    async def test_bad_uuid(self, client, subnet):
        base = f"/api/v1/subnets/{subnet['id']}/ips"

        response = await client.patch(f"{base}/42", json={"hostname": "x"})
        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

        response = await client.delete(f"{base}/42")
        assert response.status_code == 400
        assert response.json() == {"error": "bad request"}

    @pytest.mark.asyncio
    async def test_subnet_delete_removes_ips(self, client, subnet):
        base = f"/api/v1/subnets/{subnet['id']}/ips"
        await client.post(base, json={"ip": "10.42.0.10"})

        await client.delete(f"/api/v1/subnets/{subnet['id']}")
        response = await client.post("/api/v1/subnets", json={"cidr": "10.42.0.0/24"})
        other = response.json()

        response = await client.post(
            f"/api/v1/subnets/{other['id']}/ips", json={"ip": "10.42.0.10"}
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_create_failure_not_echoed(self, mocked_client, mock_network_service):
        mock_network_service.create_ip.side_effect = RuntimeError("deadlock detected")

        response = await mocked_client.post("/api/v1/subnets/1/ips", json={"ip": "10.0.0.1"})

        assert response.status_code == 500
        assert response.json() == {"error": "internal server error while creating ip"}
