"""Dependency injection container (composition root).

Application-scoped singletons built from Settings via ``@lru_cache``.
Adapter selection lives here and nowhere else; layers below only see the
domain protocols.

Usage:
    from src.core.container import get_session_service

    service = get_session_service()
    outcome = await service.validate_session(token)

Tests reset singletons with ``get_session_service.cache_clear()`` (and the
other getters) after overriding settings.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings

# Adapters are imported inside the factories so importing the container never
# drags in SQLAlchemy/geoip2 for callers that only need the protocols.
if TYPE_CHECKING:
    from src.application.services import SessionLifecycleService
    from src.domain.protocols import (
        GeolocationProvider,
        LoggerProtocol,
        SessionGateway,
        SessionNotifier,
    )
    from src.infrastructure.persistence.database import Database


@lru_cache
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger.

    - development: console renderer
    - testing/ci/production: JSON when ``log_json`` is set
    """
    from src.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(level=settings.log_level, use_json=settings.log_json).bind(
        environment=settings.environment.value
    )


@lru_cache
def get_database() -> "Database":
    """Return the database manager singleton (shared connection pool)."""
    from src.infrastructure.persistence.database import Database

    settings = get_settings()
    return Database(database_url=settings.database_url, echo=settings.db_echo)


@lru_cache
def get_session_gateway() -> "SessionGateway":
    """Return the session store selected by ``session_store``."""
    from src.infrastructure.persistence.repositories import (
        InMemorySessionGateway,
        SQLAlchemySessionGateway,
    )

    if get_settings().session_store == "memory":
        return InMemorySessionGateway()
    return SQLAlchemySessionGateway(get_database())


@lru_cache
def get_geolocation_provider() -> "GeolocationProvider":
    """Return the IP geolocation resolver.

    Uses a GeoLite2 database when ``geoip_db_path`` is set; otherwise public
    addresses resolve to None.
    """
    from src.infrastructure.context import (
        GeoIP2GeolocationProvider,
        IPGeolocationResolver,
    )

    settings = get_settings()
    provider = (
        GeoIP2GeolocationProvider(get_logger(), settings.geoip_db_path)
        if settings.geoip_db_path
        else None
    )
    return IPGeolocationResolver(
        provider, timeout_seconds=settings.geolocation_timeout_seconds
    )


@lru_cache
def get_session_notifier() -> "SessionNotifier":
    """Return the audit/alert sink (structured audit log lines)."""
    from src.infrastructure.notifications import LoggerSessionNotifier

    return LoggerSessionNotifier(get_logger())


@lru_cache
def get_session_service() -> "SessionLifecycleService":
    """Return the session lifecycle service singleton."""
    from src.application.services import SessionLifecycleService
    from src.domain.value_objects import SessionPolicy

    settings = get_settings()
    return SessionLifecycleService(
        get_session_gateway(),
        logger=get_logger(),
        notifier=get_session_notifier(),
        geolocation=get_geolocation_provider(),
        default_policy=SessionPolicy.defaults(settings),
        gateway_timeout_seconds=settings.session_gateway_timeout_seconds,
        notifier_timeout_seconds=settings.notifier_timeout_seconds,
        geolocation_timeout_seconds=settings.geolocation_timeout_seconds,
        revocation_reason_max_length=settings.revocation_reason_max_length,
    )
