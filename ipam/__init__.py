"""
IPAM - IP Address Management

Subnets and the addresses recorded in them, behind an authenticated HTTP API.

Architecture:
┌─────────────────────────────────────────────────────────┐
│  HTTP                                                    │
│  - AuthenticationMiddleware: bearer token gate (OIDC)   │
│  - Routes: subnets, ips, health probes                  │
└─────────────────────────────────────────────────────────┘
                        │ calls
                        ▼
┌─────────────────────────────────────────────────────────┐
│  Services                                                │
│  - LoggingNetworkService: structured logging decorator  │
│  - NetworkService: containment and integrity rules      │
└─────────────────────────────────────────────────────────┘
                        │ uses
                        ▼
┌─────────────────────────────────────────────────────────┐
│  Persistence                                             │
│  - PostgreSQL repositories (SQLAlchemy async)           │
│  - In-memory repositories                               │
└─────────────────────────────────────────────────────────┘
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .core.entities import IPAddress, Subnet
from .services import LoggingNetworkService, NetworkService, with_logging

__all__ = [
    # Version
    "__version__",
    # Config
    "Settings",
    "get_settings",
    # Entities
    "IPAddress",
    "Subnet",
    # Services
    "LoggingNetworkService",
    "NetworkService",
    "with_logging",
]
