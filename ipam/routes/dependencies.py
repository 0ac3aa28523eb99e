"""FastAPI Dependencies for IPAM

Provides dependency injection for core services.
"""

from typing import Annotated

from fastapi import Depends, Path

from ..auth import Authenticator, Principal, get_principal
from ..core.interfaces import IHealthChecker, INetworkService

# Global service instances (initialized in lifespan)
_network_service: INetworkService | None = None
_health_checker: IHealthChecker | None = None
_authenticator: Authenticator | None = None


def init_services(
    network_service: INetworkService,
    health_checker: IHealthChecker,
    authenticator: Authenticator | None = None,
) -> None:
    """Initialize global service instances (called from lifespan)"""
    global _network_service, _health_checker, _authenticator

    _network_service = network_service
    _health_checker = health_checker
    _authenticator = authenticator


def reset_services() -> None:
    """Drop global service instances (called on shutdown)"""
    global _network_service, _health_checker, _authenticator

    _network_service = None
    _health_checker = None
    _authenticator = None


# Dependency functions
def get_network_service() -> INetworkService:
    """Get NetworkService instance"""
    if _network_service is None:
        raise RuntimeError("NetworkService not initialized")
    return _network_service


def get_health_checker() -> IHealthChecker:
    """Get HealthChecker instance"""
    if _health_checker is None:
        raise RuntimeError("HealthChecker not initialized")
    return _health_checker


def get_authenticator() -> Authenticator | None:
    """Get Authenticator instance, None when authentication is disabled"""
    return _authenticator


# Type aliases for cleaner dependency injection
NetworkServiceDep = Annotated[INetworkService, Depends(get_network_service)]
HealthCheckerDep = Annotated[IHealthChecker, Depends(get_health_checker)]
PrincipalDep = Annotated[Principal | None, Depends(get_principal)]

# Subnet ids are BIGSERIAL; larger path values are rejected as bad requests
SubnetIdPath = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]
