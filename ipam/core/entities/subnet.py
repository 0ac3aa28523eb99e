"""Subnet Domain Entity"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from ipaddress import IPv4Network, IPv6Network

IPNetwork = IPv4Network | IPv6Network


@dataclass
class Subnet:
    """
    Subnet Domain Entity

    A network prefix under which IP addresses are recorded. The id and
    timestamps are assigned by storage; the CIDR never changes after creation.
    """

    id: int
    cidr: IPNetwork
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        """Validate invariants"""
        if not isinstance(self.cidr, (IPv4Network, IPv6Network)):
            raise ValueError("cidr must be a network prefix")
