"""IP Address Repository Interface

Defines contract for IP address persistence operations.
"""

from abc import ABC, abstractmethod

from ..entities import IPAddress, IPAddressValue


class IIPRepository(ABC):
    """
    Abstract interface for IP address persistence

    Implementations translate storage-specific failures: missing rows become
    NotFoundException and a uniqueness violation on insert becomes
    ConflictException.
    """

    @abstractmethod
    async def list_by_subnet_id(self, subnet_id: int) -> list[IPAddress]:
        """
        Find all addresses recorded in a subnet

        Args:
            subnet_id: Parent subnet identifier

        Returns:
            List of IP address entities
        """
        pass

    @abstractmethod
    async def find_by_id_and_subnet(self, ip_id: str, subnet_id: int) -> IPAddress:
        """
        Find an address by id, scoped to its subnet

        Args:
            ip_id: IP address identifier (UUID string)
            subnet_id: Parent subnet identifier

        Returns:
            IP address entity

        Raises:
            NotFoundException: If the id does not exist within this subnet
            InvalidInputException: If the id is not a valid identifier
        """
        pass

    @abstractmethod
    async def create(self, ip: IPAddressValue, hostname: str, subnet_id: int) -> IPAddress:
        """
        Insert a new address

        The insert is attempted unconditionally; uniqueness is enforced by
        storage.

        Args:
            ip: Parsed host address
            hostname: Free text hostname
            subnet_id: Parent subnet identifier

        Returns:
            Stored IP address with id and timestamps assigned

        Raises:
            ConflictException: If the address already exists
        """
        pass

    @abstractmethod
    async def update_hostname(self, ip_id: str, hostname: str) -> IPAddress:
        """
        Replace the hostname of an address

        Args:
            ip_id: IP address identifier
            hostname: New hostname

        Returns:
            Updated IP address entity

        Raises:
            NotFoundException: If the id does not exist
        """
        pass

    @abstractmethod
    async def delete_by_id_and_subnet(self, ip_id: str, subnet_id: int) -> bool:
        """
        Delete an address, scoped to its subnet

        Args:
            ip_id: IP address identifier
            subnet_id: Parent subnet identifier

        Returns:
            True if deleted, False if not found
        """
        pass
