"""Core shared kernel.

Foundational pieces used across all layers:
- Settings (config.py) and the composition root (container.py)
- Result types for expected failures
- Error codes, domain errors and contract exceptions
- IP address helpers

The core module does not import from other layers at import time.
"""

from src.core.enums import ErrorCode
from src.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    SessionContractError,
    ValidationError,
)
from src.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "SessionContractError",
    "Success",
    "ValidationError",
]
