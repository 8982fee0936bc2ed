"""Domain enums for session lifecycle logic.

Available Enums:
    - SessionState: Observed lifecycle state of a session
    - InvalidReason: Why a token failed validation
    - RevocationReason: Well-known revocation reasons
    - GatewayErrorKind: Classified session store failures
"""

from src.domain.enums.gateway_error_kind import GatewayErrorKind
from src.domain.enums.invalid_reason import InvalidReason
from src.domain.enums.revocation_reason import RevocationReason
from src.domain.enums.session_state import SessionState

__all__ = [
    "GatewayErrorKind",
    "InvalidReason",
    "RevocationReason",
    "SessionState",
]
