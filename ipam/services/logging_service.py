"""Logging Network Service

Decorator that logs the outcome of every network service call without
altering results or raised exceptions.
"""

from typing import Any

from ..core.entities import CreateIPInput, CreateSubnetInput, IPAddress, Subnet, UpdateIPInput
from ..core.interfaces import INetworkService


class LoggingNetworkService(INetworkService):
    """
    Wraps an INetworkService with structured logging

    Failures are logged at error level and re-raised unchanged. Successful
    subnet mutations are logged at info level, address mutations at debug.
    """

    def __init__(self, next_service: INetworkService, logger: Any):
        self.next = next_service
        self.logger = logger

    async def list_subnets(self) -> list[Subnet]:
        try:
            return await self.next.list_subnets()
        except Exception as e:
            self.logger.error("list_subnets_failed", error=str(e))
            raise

    async def create_subnet(self, data: CreateSubnetInput) -> Subnet:
        try:
            subnet = await self.next.create_subnet(data)
        except Exception as e:
            self.logger.error("create_subnet_failed", cidr=data.cidr, error=str(e))
            raise

        self.logger.info("subnet_created", subnet_id=subnet.id, cidr=str(subnet.cidr))
        return subnet

    async def get_subnet(self, subnet_id: int) -> Subnet:
        try:
            return await self.next.get_subnet(subnet_id)
        except Exception as e:
            self.logger.error("get_subnet_failed", subnet_id=subnet_id, error=str(e))
            raise

    async def delete_subnet(self, subnet_id: int) -> None:
        try:
            await self.next.delete_subnet(subnet_id)
        except Exception as e:
            self.logger.error("delete_subnet_failed", subnet_id=subnet_id, error=str(e))
            raise

        self.logger.info("subnet_deleted", subnet_id=subnet_id)

    async def list_ips(self, subnet_id: int) -> list[IPAddress]:
        try:
            return await self.next.list_ips(subnet_id)
        except Exception as e:
            self.logger.error("list_ips_failed", subnet_id=subnet_id, error=str(e))
            raise

    async def create_ip(self, subnet_id: int, data: CreateIPInput) -> IPAddress:
        try:
            ip = await self.next.create_ip(subnet_id, data)
        except Exception as e:
            self.logger.error("create_ip_failed", subnet_id=subnet_id, ip=data.ip, error=str(e))
            raise

        self.logger.debug("ip_created", subnet_id=subnet_id, ip=str(ip.ip), ip_id=ip.id)
        return ip

    async def update_ip_hostname(
        self, subnet_id: int, ip_id: str, data: UpdateIPInput
    ) -> IPAddress:
        try:
            ip = await self.next.update_ip_hostname(subnet_id, ip_id, data)
        except Exception as e:
            self.logger.error(
                "update_ip_hostname_failed", subnet_id=subnet_id, ip_id=ip_id, error=str(e)
            )
            raise

        self.logger.debug("ip_hostname_updated", subnet_id=subnet_id, ip_id=ip_id)
        return ip

    async def delete_ip(self, subnet_id: int, ip_id: str) -> None:
        try:
            await self.next.delete_ip(subnet_id, ip_id)
        except Exception as e:
            self.logger.error("delete_ip_failed", subnet_id=subnet_id, ip_id=ip_id, error=str(e))
            raise

        self.logger.debug("ip_deleted", subnet_id=subnet_id, ip_id=ip_id)


def with_logging(service: INetworkService, logger: Any = None) -> INetworkService:
    """Wrap ``service`` in a LoggingNetworkService, or return it as is when no logger is given"""
    if logger is None or service is None:
        return service
    return LoggingNetworkService(service, logger)
