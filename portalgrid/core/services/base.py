from abc import ABC, abstractmethod

from ..repository import InMemoryLayoutRepository


class BaseService(ABC):
    """Base class for all services."""

    def __init__(self, repo: InMemoryLayoutRepository):
        self.repo = repo

    @classmethod
    @abstractmethod
    def from_repository(cls, repo: InMemoryLayoutRepository) -> "BaseService":
        """Factory method to create service instance."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the service is healthy."""
        pass
