"""In-memory implementations of the repository interfaces"""

import uuid
from dataclasses import replace
from datetime import UTC, datetime

from ....core.entities import IPAddress, IPAddressValue, IPNetwork, Subnet
from ....core.exceptions import ConflictException, NotFoundException
from ....core.interfaces import IHealthChecker, IIPRepository, ISubnetRepository
from .store import InMemoryStore


class InMemorySubnetRepository(ISubnetRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_all(self) -> list[Subnet]:
        return [replace(s) for _, s in sorted(self._store.subnets.items())]

    async def find_by_id(self, subnet_id: int) -> Subnet:
        subnet = self._store.subnets.get(subnet_id)
        if subnet is None:
            raise NotFoundException(f"Subnet {subnet_id} not found")
        return replace(subnet)

    async def create(self, cidr: IPNetwork, description: str) -> Subnet:
        now = datetime.now(UTC)
        subnet = Subnet(
            id=self._store.next_subnet_id(),
            cidr=cidr,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self._store.subnets[subnet.id] = subnet
        return replace(subnet)

    async def delete(self, subnet_id: int) -> bool:
        if subnet_id not in self._store.subnets:
            return False
        self._store.remove_subnet(subnet_id)
        return True


class InMemoryIPRepository(IIPRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def list_by_subnet_id(self, subnet_id: int) -> list[IPAddress]:
        return [replace(i) for i in self._store.ips.values() if i.subnet_id == subnet_id]

    async def find_by_id_and_subnet(self, ip_id: str, subnet_id: int) -> IPAddress:
        record = self._store.ips.get(ip_id)
        if record is None or record.subnet_id != subnet_id:
            raise NotFoundException(f"IP {ip_id} not found")
        return replace(record)

    async def create(self, ip: IPAddressValue, hostname: str, subnet_id: int) -> IPAddress:
        if ip in self._store.ip_index:
            raise ConflictException(f"IP {ip} already exists")
        if subnet_id not in self._store.subnets:
            raise NotFoundException(f"Subnet {subnet_id} not found")

        now = datetime.now(UTC)
        record = IPAddress(
            id=str(uuid.uuid4()),
            ip=ip,
            hostname=hostname,
            subnet_id=subnet_id,
            created_at=now,
            updated_at=now,
        )
        self._store.ips[record.id] = record
        self._store.ip_index[ip] = record.id
        return replace(record)

    async def update_hostname(self, ip_id: str, hostname: str) -> IPAddress:
        record = self._store.ips.get(ip_id)
        if record is None:
            raise NotFoundException(f"IP {ip_id} not found")
        record.hostname = hostname
        record.updated_at = datetime.now(UTC)
        return replace(record)

    async def delete_by_id_and_subnet(self, ip_id: str, subnet_id: int) -> bool:
        record = self._store.ips.get(ip_id)
        if record is None or record.subnet_id != subnet_id:
            return False
        self._store.remove_ip(ip_id)
        return True


class InMemoryHealthChecker(IHealthChecker):
    async def ping(self) -> None:
        return None
