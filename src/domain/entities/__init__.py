"""Domain entities.

Entities have identity and mutable state guarded by business rules.
"""

from src.domain.entities.session import Session

__all__ = ["Session"]
