"""Domain protocols (ports).

Interfaces the domain and application layers depend on; infrastructure
provides the adapters.
"""

from src.domain.protocols.geolocation_provider import GeolocationProvider
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_gateway import GatewayError, SessionGateway
from src.domain.protocols.session_notifier import SessionNotifier

__all__ = [
    "GatewayError",
    "GeolocationProvider",
    "LoggerProtocol",
    "SessionGateway",
    "SessionNotifier",
]
