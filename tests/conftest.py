"""Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

import ipaddress
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from ipam.core.entities import IPAddress, Subnet
from ipam.core.interfaces import IIPRepository, ISubnetRepository
from ipam.infrastructure.persistence.memory import (
    InMemoryIPRepository,
    InMemoryStore,
    InMemorySubnetRepository,
)
from ipam.services import NetworkService

# =============================================================================
# Mock Repositories
# =============================================================================


@pytest.fixture
def mock_subnet_repository() -> ISubnetRepository:
    """Mock SubnetRepository for testing"""
    repo = AsyncMock(spec=ISubnetRepository)
    return repo


@pytest.fixture
def mock_ip_repository() -> IIPRepository:
    """Mock IPRepository for testing"""
    repo = AsyncMock(spec=IIPRepository)
    return repo


# =============================================================================
# In-memory Storage
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def memory_service(memory_store) -> NetworkService:
    """NetworkService over in-memory repositories sharing one store"""
    return NetworkService(
        InMemorySubnetRepository(memory_store),
        InMemoryIPRepository(memory_store),
    )


# =============================================================================
# Sample Entities
# =============================================================================


@pytest.fixture
def sample_subnet() -> Subnet:
    """Sample Subnet entity for testing"""
    return Subnet(
        id=4,
        cidr=ipaddress.ip_network("10.0.0.0/24"),
        description="Office network",
        created_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
    )


@pytest.fixture
def sample_ip(sample_subnet) -> IPAddress:
    """Sample IPAddress entity for testing"""
    return IPAddress(
        id="550e8400-e29b-41d4-a716-446655440000",
        ip=ipaddress.ip_address("10.0.0.1"),
        subnet_id=sample_subnet.id,
        hostname="printer-1",
        created_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
    )
