"""Reasons a session token failed validation."""

from enum import Enum


class InvalidReason(str, Enum):
    """Why validate_session returned InvalidSession.

    Single vocabulary for every caller; store outages map to NOT_FOUND so a
    degraded store reads as "please sign in again".
    """

    NOT_FOUND = "not_found"
    SESSION_EXPIRED = "session_expired"
    SESSION_REVOKED = "session_revoked"
