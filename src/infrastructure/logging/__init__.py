"""Logging adapters implementing LoggerProtocol."""

from src.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
