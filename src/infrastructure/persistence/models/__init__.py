"""Database models (imported here so metadata knows every table)."""

from src.infrastructure.persistence.models.session import UserSessionModel
from src.infrastructure.persistence.models.session_policy import SessionPolicyModel

__all__ = ["SessionPolicyModel", "UserSessionModel"]
