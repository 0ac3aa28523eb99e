"""Process-local storage shared by the in-memory repositories.

Mirrors the relational schema: subnet ids come from a sequence, addresses
are unique across the whole store, and deleting a subnet removes its
addresses. Mutations never await between check and write, so each one is
atomic on the event loop.
"""

import itertools
from dataclasses import dataclass, field

from ....core.entities import IPAddress, IPAddressValue, Subnet


@dataclass
class InMemoryStore:
    subnets: dict[int, Subnet] = field(default_factory=dict)
    ips: dict[str, IPAddress] = field(default_factory=dict)
    # unique_ip: address -> ip id
    ip_index: dict[IPAddressValue, str] = field(default_factory=dict)
    _sequence: itertools.count = field(default_factory=lambda: itertools.count(1))

    def next_subnet_id(self) -> int:
        return next(self._sequence)

    def remove_ip(self, ip_id: str) -> None:
        record = self.ips.pop(ip_id)
        self.ip_index.pop(record.ip, None)

    def remove_subnet(self, subnet_id: int) -> None:
        del self.subnets[subnet_id]
        for ip_id in [i.id for i in self.ips.values() if i.subnet_id == subnet_id]:
            self.remove_ip(ip_id)
