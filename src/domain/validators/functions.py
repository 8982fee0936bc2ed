"""Session lifecycle input validators.

Pure functions that raise on caller-contract violations. They raise
SessionContractError (a ValueError) so callers that only know the ValueError
convention still catch them, while the error code stays machine-readable.
"""

import re

from src.core.enums import ErrorCode
from src.core.errors import SessionContractError

TOKEN_BYTES = 64
TOKEN_PATTERN = re.compile(rf"[0-9a-f]{{{TOKEN_BYTES * 2}}}")


def validate_identity(user_id: str, tenant_id: str) -> None:
    """Require non-blank user and tenant identities.

    Raises:
        SessionContractError: INVALID_IDENTITY if either is empty or blank.
    """
    if not isinstance(user_id, str) or not user_id.strip():
        raise SessionContractError(
            ErrorCode.INVALID_IDENTITY, "user_id must be non-empty", field="user_id"
        )
    if not isinstance(tenant_id, str) or not tenant_id.strip():
        raise SessionContractError(
            ErrorCode.INVALID_IDENTITY,
            "tenant_id must be non-empty",
            field="tenant_id",
        )


def validate_session_token(token: str) -> str:
    """Validate session token shape (128 lowercase hex characters).

    Args:
        token: Token presented by the client.

    Returns:
        The token unchanged.

    Raises:
        SessionContractError: INVALID_TOKEN if empty or malformed.

    Example:
        >>> validate_session_token("ab" * 64) == "ab" * 64
        True
    """
    if not isinstance(token, str) or not TOKEN_PATTERN.fullmatch(token):
        raise SessionContractError(
            ErrorCode.INVALID_TOKEN, "Malformed session token", field="token"
        )
    return token


def validate_revocation_reason(reason: str, max_length: int) -> str:
    """Validate a free-text revocation reason.

    Args:
        reason: Reason text (a RevocationReason value or free text).
        max_length: Upper bound for audit display.

    Returns:
        The reason with surrounding whitespace stripped.

    Raises:
        SessionContractError: INVALID_REVOCATION_REASON if blank or too long.
    """
    cleaned = reason.strip() if isinstance(reason, str) else ""
    if not cleaned:
        raise SessionContractError(
            ErrorCode.INVALID_REVOCATION_REASON,
            "Revocation reason must be non-empty",
            field="reason",
        )
    if len(cleaned) > max_length:
        raise SessionContractError(
            ErrorCode.INVALID_REVOCATION_REASON,
            f"Revocation reason exceeds {max_length} characters",
            field="reason",
        )
    return cleaned
