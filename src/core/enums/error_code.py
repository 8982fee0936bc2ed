"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming and carried by
contract exceptions raised at the session lifecycle boundary.

Categories:
- Contract violations (INVALID_*, MISSING_*)
- Business rule violations (*_DENIED)
- Resource errors (*_NOT_FOUND)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Contract violations
    INVALID_IDENTITY = "invalid_identity"
    MISSING_DEVICE_INFO = "missing_device_info"
    INVALID_TOKEN = "invalid_token"
    INVALID_REVOCATION_REASON = "invalid_revocation_reason"
    VALIDATION_FAILED = "validation_failed"

    # Business rule violations
    CONCURRENT_SESSION_DENIED = "concurrent_session_denied"

    # Resource errors
    SESSION_NOT_FOUND = "session_not_found"
