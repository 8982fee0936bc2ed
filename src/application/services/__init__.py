"""Application services."""

from src.application.services.session_lifecycle_service import (
    SessionLifecycleService,
)

__all__ = ["SessionLifecycleService"]
