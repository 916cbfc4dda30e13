from functools import lru_cache
from typing import Callable, Type, TypeVar

from fastapi import Depends
from loguru import logger

from .registry import get_service_factory
from .repository import InMemoryLayoutRepository

T = TypeVar("T")


@lru_cache
def get_layout_repository() -> InMemoryLayoutRepository:
    """
    Dependency returning the process-wide layout store
    """
    logger.info("Initializing in-memory layout repository")
    return InMemoryLayoutRepository()


def get_service(service_class: Type[T]) -> Callable[[InMemoryLayoutRepository], T]:
    """Dependency injector for services"""

    def factory(
        repo: InMemoryLayoutRepository = Depends(get_layout_repository),
    ) -> T:
        logger.debug(f"Factory called for service {service_class.__name__}")
        return get_service_factory(service_class)(repo)

    return factory
