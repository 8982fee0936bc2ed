"""Client context parsing: user agents and IP geolocation."""

from src.infrastructure.context.geolocation import (
    GeoIP2GeolocationProvider,
    IPGeolocationResolver,
    get_geolocation_from_ip,
)
from src.infrastructure.context.user_agent_parser import parse_user_agent

__all__ = [
    "GeoIP2GeolocationProvider",
    "IPGeolocationResolver",
    "get_geolocation_from_ip",
    "parse_user_agent",
]
