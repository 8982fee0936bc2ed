"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from src.core.errors import ConflictError, SessionContractError
"""

from src.core.errors.common_errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.core.errors.contract_error import SessionContractError
from src.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "SessionContractError",
]
