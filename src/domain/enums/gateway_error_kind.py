"""Closed set of session store failure kinds.

Store adapters translate driver-specific failures into one of these so the
lifecycle service switches on a stable contract.
"""

from enum import Enum


class GatewayErrorKind(str, Enum):
    """Classified session store failure."""

    NOT_FOUND = "not_found"
    """Addressed record does not exist."""

    CONFLICT = "conflict"
    """Conditional write refused (policy cap reached, duplicate key)."""

    UNAVAILABLE = "unavailable"
    """Store unreachable or timed out; transient."""

    OTHER = "other"
    """Any other store failure."""
