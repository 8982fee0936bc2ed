"""Well-known revocation reasons.

Any bounded free-text reason is accepted by revoke_session; these constants
cover the reasons the lifecycle code itself produces and the common product
flows (logout, admin action).
"""

from enum import StrEnum


class RevocationReason(StrEnum):
    """Common revocation reasons stored in ``revoked_reason``."""

    MANUAL_LOGOUT = "manual_logout"
    TIMEOUT = "timeout"
    SECURITY_VIOLATION = "security_violation"
    MAX_SESSIONS_EXCEEDED = "max_sessions_exceeded"
    ADMIN_ACTION = "admin_action"
    SIGNED_OUT_ELSEWHERE = "signed_out_elsewhere"
