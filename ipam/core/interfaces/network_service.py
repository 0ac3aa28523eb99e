"""Network Service Interface

The operation set exposed to the HTTP layer. Both the domain engine and
its logging decorator implement it, so either can be wired in.
"""

from abc import ABC, abstractmethod

from ..entities import CreateIPInput, CreateSubnetInput, IPAddress, Subnet, UpdateIPInput


class INetworkService(ABC):
    @abstractmethod
    async def list_subnets(self) -> list[Subnet]:
        pass

    @abstractmethod
    async def create_subnet(self, data: CreateSubnetInput) -> Subnet:
        pass

    @abstractmethod
    async def get_subnet(self, subnet_id: int) -> Subnet:
        pass

    @abstractmethod
    async def delete_subnet(self, subnet_id: int) -> None:
        pass

    @abstractmethod
    async def list_ips(self, subnet_id: int) -> list[IPAddress]:
        pass

    @abstractmethod
    async def create_ip(self, subnet_id: int, data: CreateIPInput) -> IPAddress:
        pass

    @abstractmethod
    async def update_ip_hostname(
        self, subnet_id: int, ip_id: str, data: UpdateIPInput
    ) -> IPAddress:
        pass

    @abstractmethod
    async def delete_ip(self, subnet_id: int, ip_id: str) -> None:
        pass
