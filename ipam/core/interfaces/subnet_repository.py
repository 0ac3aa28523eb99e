"""Subnet Repository Interface

Defines contract for subnet persistence operations.
"""

from abc import ABC, abstractmethod

from ..entities import IPNetwork, Subnet


class ISubnetRepository(ABC):
    """
    Abstract interface for Subnet persistence

    Infrastructure layer provides concrete implementation.
    """

    @abstractmethod
    async def find_all(self) -> list[Subnet]:
        """
        Find all subnets

        Returns:
            List of all subnet entities
        """
        pass

    @abstractmethod
    async def find_by_id(self, subnet_id: int) -> Subnet:
        """
        Find subnet by ID

        Args:
            subnet_id: Subnet identifier

        Returns:
            Subnet entity

        Raises:
            NotFoundException: If no subnet has this id
        """
        pass

    @abstractmethod
    async def create(self, cidr: IPNetwork, description: str) -> Subnet:
        """
        Insert a new subnet

        Args:
            cidr: Parsed network prefix
            description: Free text description

        Returns:
            Stored subnet with id and timestamps assigned
        """
        pass

    @abstractmethod
    async def delete(self, subnet_id: int) -> bool:
        """
        Delete a subnet

        Args:
            subnet_id: Subnet identifier

        Returns:
            True if deleted, False if not found
        """
        pass
