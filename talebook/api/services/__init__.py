"""Services for tale management and generation."""

from .exceptions import Forbidden, GenerationFailed, NotFound, TaleError, ValidationError
from .tale_service import TaleService

__all__ = [
    "TaleService",
    "TaleError",
    "ValidationError",
    "NotFound",
    "Forbidden",
    "GenerationFailed",
]
