"""Network Service

Business rules for subnets and the addresses recorded in them.
"""

import ipaddress

from ..core.entities import (
    CreateIPInput,
    CreateSubnetInput,
    IPAddress,
    IPAddressValue,
    IPNetwork,
    Subnet,
    UpdateIPInput,
)
from ..core.exceptions import (
    InvalidInputException,
    IPNotFoundException,
    NotFoundException,
    SubnetNotFoundException,
)
from ..core.interfaces import IIPRepository, INetworkService, ISubnetRepository


def parse_cidr(value: str) -> IPNetwork:
    """
    Parse a network prefix such as ``10.0.0.0/24``

    The mask is mandatory and must be a prefix length; netmask forms such
    as ``/255.255.255.0`` are rejected. Host bits must be zero.

    Raises:
        InvalidInputException: If the value is not a network prefix
    """
    _, _, prefix_length = value.strip().partition("/")
    if not (prefix_length.isascii() and prefix_length.isdigit()):
        raise InvalidInputException("invalid cidr")
    try:
        return ipaddress.ip_network(value.strip(), strict=True)
    except ValueError:
        raise InvalidInputException("invalid cidr") from None


def parse_ip(value: str) -> IPAddressValue:
    """
    Parse a single host address

    Zoned IPv6 addresses (``fe80::1%eth0``) are rejected.

    Raises:
        InvalidInputException: If the value is not an IPv4 or IPv6 address
    """
    try:
        ip = ipaddress.ip_address(value.strip())
    except ValueError:
        raise InvalidInputException("invalid ip") from None

    if getattr(ip, "scope_id", None) is not None:
        raise InvalidInputException("invalid ip")
    return ip


def validate_ip_in_subnet(network: IPNetwork, ip: IPAddressValue) -> None:
    """
    Check that ``ip`` may be recorded in ``network``

    IPv4 network and broadcast addresses are rejected, except on /31
    point-to-point links where both addresses are usable. The single
    address of a /32 is both, so a /32 holds no usable address. IPv6 prefixes
    have no broadcast address and are fully usable.

    Raises:
        InvalidInputException: On a containment violation
    """
    if ip not in network:
        raise InvalidInputException("ip not in subnet")

    if ip.version == 4 and network.prefixlen != 31:
        if ip == network.network_address or ip == network.broadcast_address:
            raise InvalidInputException("network or broadcast ip")


class NetworkService(INetworkService):
    """
    Network Service

    Orchestrates subnet and IP address operations over the repositories.
    Holds no locks: concurrent inserts of the same address are settled by
    the storage uniqueness constraint.
    """

    def __init__(self, subnet_repository: ISubnetRepository, ip_repository: IIPRepository):
        """
        Initialize Network Service

        Args:
            subnet_repository: Subnet repository implementation
            ip_repository: IP address repository implementation
        """
        self.subnets = subnet_repository
        self.ips = ip_repository

    async def list_subnets(self) -> list[Subnet]:
        return await self.subnets.find_all()

    async def create_subnet(self, data: CreateSubnetInput) -> Subnet:
        """
        Create a new subnet

        Duplicate CIDRs are accepted.

        Raises:
            InvalidInputException: If the CIDR cannot be parsed
        """
        cidr = parse_cidr(data.cidr)
        return await self.subnets.create(cidr, data.description)

    async def get_subnet(self, subnet_id: int) -> Subnet:
        return await self.subnets.find_by_id(subnet_id)

    async def delete_subnet(self, subnet_id: int) -> None:
        """
        Delete a subnet

        Raises:
            SubnetNotFoundException: If nothing was deleted
        """
        deleted = await self.subnets.delete(subnet_id)
        if not deleted:
            raise SubnetNotFoundException(f"Subnet {subnet_id} not found")

    async def list_ips(self, subnet_id: int) -> list[IPAddress]:
        await self._require_subnet(subnet_id)
        return await self.ips.list_by_subnet_id(subnet_id)

    async def create_ip(self, subnet_id: int, data: CreateIPInput) -> IPAddress:
        """
        Record an address in a subnet

        Args:
            subnet_id: Parent subnet identifier
            data: Raw address and hostname

        Returns:
            Created IP address entity

        Raises:
            SubnetNotFoundException: If the subnet does not exist
            InvalidInputException: If the address is malformed or not usable
                in the subnet
            ConflictException: If the address already exists
        """
        subnet = await self._require_subnet(subnet_id)
        ip = parse_ip(data.ip)
        validate_ip_in_subnet(subnet.cidr, ip)
        return await self.ips.create(ip, data.hostname, subnet_id)

    async def update_ip_hostname(
        self, subnet_id: int, ip_id: str, data: UpdateIPInput
    ) -> IPAddress:
        """
        Change the hostname of an address

        The address is looked up within the given subnet first, so an id
        belonging to another subnet is reported as not found.

        Raises:
            SubnetNotFoundException: If the subnet does not exist
            IPNotFoundException: If the address is not in this subnet
        """
        await self._require_subnet(subnet_id)
        try:
            await self.ips.find_by_id_and_subnet(ip_id, subnet_id)
            return await self.ips.update_hostname(ip_id, data.hostname)
        except NotFoundException:
            raise IPNotFoundException(f"IP {ip_id} not found in subnet {subnet_id}") from None

    async def delete_ip(self, subnet_id: int, ip_id: str) -> None:
        """
        Delete an address from a subnet

        Raises:
            NotFoundException: If nothing was deleted
        """
        deleted = await self.ips.delete_by_id_and_subnet(ip_id, subnet_id)
        if not deleted:
            raise NotFoundException(f"IP {ip_id} not found in subnet {subnet_id}")

    async def _require_subnet(self, subnet_id: int) -> Subnet:
        try:
            return await self.subnets.find_by_id(subnet_id)
        except NotFoundException:
            raise SubnetNotFoundException(f"Subnet {subnet_id} not found") from None
