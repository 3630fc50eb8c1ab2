"""Database module for tale persistence."""

from .db import Base, close_pool, get_pool, init_db, open_pool
from .models import Tale
from .repository import TaleRepository

__all__ = [
    # Connection management
    "init_db",
    "open_pool",
    "get_pool",
    "close_pool",
    "Base",
    # Models
    "Tale",
    # Repositories
    "TaleRepository",
]
