"""Repository Interfaces

Abstract interfaces for data access (Port pattern in Hexagonal Architecture).
Infrastructure layer implements these interfaces.
"""

from .health_checker import IHealthChecker
from .ip_repository import IIPRepository
from .network_service import INetworkService
from .subnet_repository import ISubnetRepository

__all__ = ["IHealthChecker", "IIPRepository", "INetworkService", "ISubnetRepository"]
