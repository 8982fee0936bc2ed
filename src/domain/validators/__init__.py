"""Validators package exports."""

from src.domain.validators.functions import (
    TOKEN_BYTES,
    validate_identity,
    validate_revocation_reason,
    validate_session_token,
)

__all__ = [
    "TOKEN_BYTES",
    "validate_identity",
    "validate_revocation_reason",
    "validate_session_token",
]
