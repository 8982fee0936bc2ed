"""Session lifecycle states.

State Machine:
    (created) → ACTIVE → EXPIRED   (derived at read time, never persisted)
                ACTIVE → REVOKED   (persisted, terminal)
    NOT_FOUND is the state of a token that resolves to no record.

Usage:
    from src.domain.enums import SessionState

    if session.state(now) is SessionState.ACTIVE:
        ...
"""

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle state of a session as observed at a point in time.

    EXPIRED and REVOKED are both terminal for validation but are kept apart so
    callers can tell "your session ended" from "you were signed out".
    """

    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
    NOT_FOUND = "not_found"
