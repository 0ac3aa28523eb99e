"""Business Logic Layer

Service classes orchestrate business operations using domain entities and repositories.
"""

from .logging_service import LoggingNetworkService, with_logging
from .network_service import NetworkService, parse_cidr, parse_ip, validate_ip_in_subnet

__all__ = [
    "LoggingNetworkService",
    "NetworkService",
    "parse_cidr",
    "parse_ip",
    "validate_ip_in_subnet",
    "with_logging",
]
