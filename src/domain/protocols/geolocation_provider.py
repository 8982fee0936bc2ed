"""Geolocation lookup provider protocol."""

from typing import Protocol

from src.domain.value_objects import GeoLocation


class GeolocationProvider(Protocol):
    """Resolves a publicly routable IP address to a location.

    Implementations may raise on lookup failure; callers bound the call with
    a timeout and treat any error as "no location".
    """

    async def lookup(self, ip_address: str) -> GeoLocation | None:
        """Return the location of ``ip_address`` or None if unknown."""
        ...
