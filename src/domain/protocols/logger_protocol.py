"""LoggerProtocol definition for structured logging.

Backend-agnostic port for structured logs: a message plus key-value context.
Implementations must never emit secrets; session tokens are logged as an
8-character ``token_prefix`` at most.

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.warning("create_session fallback", user_id=user_id, tenant_id=tenant_id)

    scoped = logger.bind(tenant_id=tenant_id)
    scoped.info("session revoked", session_id=str(session_id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message (degraded but functional)."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with ``context`` included in every call.

        The original logger is left unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
