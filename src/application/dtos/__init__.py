"""Application DTOs."""

from src.application.dtos.session_dtos import (
    CreateSessionOptions,
    InvalidSession,
    IssuedSession,
    SessionTimeout,
    ValidationOutcome,
    ValidSession,
)

__all__ = [
    "CreateSessionOptions",
    "InvalidSession",
    "IssuedSession",
    "SessionTimeout",
    "ValidSession",
    "ValidationOutcome",
]
