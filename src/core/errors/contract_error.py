"""Contract violation exception.

Raised (not returned) when a caller passes input that can never be valid:
empty identities, missing device context, malformed tokens, unbounded
revocation reasons. These indicate a misbehaving caller rather than a runtime
condition, so they do not travel through Result types.
"""

from src.core.enums import ErrorCode


class SessionContractError(ValueError):
    """Caller passed input that violates the session lifecycle contract.

    Attributes:
        code: Machine-readable error code.
        field: Name of the offending argument, if any.
    """

    def __init__(self, code: ErrorCode, message: str, field: str | None = None):
        super().__init__(message)
        self.code = code
        self.field = field

    def __str__(self) -> str:
        return f"{self.code.value}: {self.args[0]}"
