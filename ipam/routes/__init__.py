"""IPAM API Routes

One router per resource; service wiring lives in ``dependencies``.
"""

from . import dependencies, health, ips, subnets

__all__ = [
    "dependencies",
    "health",
    "ips",
    "subnets",
]
