from ..errors import (
    ConflictError,
    InvalidConfigurationError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from .layout_service import LayoutService

__all__ = [
    "LayoutService",
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "InvalidConfigurationError",
]
