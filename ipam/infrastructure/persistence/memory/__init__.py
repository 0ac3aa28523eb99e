"""In-memory persistence adapters.

Used for the ``memory`` storage backend and as repository fakes in tests.
"""

from .repositories import InMemoryHealthChecker, InMemoryIPRepository, InMemorySubnetRepository
from .store import InMemoryStore

__all__ = [
    "InMemoryHealthChecker",
    "InMemoryIPRepository",
    "InMemoryStore",
    "InMemorySubnetRepository",
]
