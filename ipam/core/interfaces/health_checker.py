"""Health Checker Interface"""

from abc import ABC, abstractmethod


class IHealthChecker(ABC):
    """Readiness probe collaborator backed by the storage layer"""

    @abstractmethod
    async def ping(self) -> None:
        """
        Check that storage responds

        Raises:
            Exception: Any error means storage is not ready
        """
        pass
