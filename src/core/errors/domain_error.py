"""Base domain error class for business outcomes.

DomainError is the base class for every error that is *returned* rather than
raised. Business outcomes such as a concurrent-session denial flow back to the
caller inside a ``Failure`` so they can be branched on with ``match``.

Architecture:
- Does NOT inherit from Exception (not raised, returned in Result)
- Uses dataclass inheritance (NOT Protocol/ABC)
- Caller-contract violations use SessionContractError instead (raised)

Usage:
    match result:
        case Failure(error=DomainError(code=ErrorCode.CONCURRENT_SESSION_DENIED)):
            ...
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
