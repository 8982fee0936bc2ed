"""Database persistence infrastructure.

- Base model and column types
- Database connection and session management
- Session store adapters (repositories/)
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
