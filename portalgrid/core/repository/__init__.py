from .layout_repository import InMemoryLayoutRepository

__all__ = ["InMemoryLayoutRepository"]
