"""IP Address Domain Entity"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from ipaddress import IPv4Address, IPv6Address

IPAddressValue = IPv4Address | IPv6Address


@dataclass
class IPAddress:
    """
    IP Address Domain Entity

    A single host address recorded inside a subnet. ``id`` is an opaque
    UUID string assigned at creation; only ``hostname`` is mutable.
    """

    id: str
    ip: IPAddressValue
    subnet_id: int
    hostname: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        """Validate invariants"""
        if not self.id:
            raise ValueError("id cannot be empty")
        if not isinstance(self.ip, (IPv4Address, IPv6Address)):
            raise ValueError("ip must be a host address")
