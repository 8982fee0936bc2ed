"""IP geolocation.

``get_geolocation_from_ip`` is the lookup contract used at session creation:
- malformed input → None
- private/reserved ranges → local placeholder, no lookup
- public addresses → provider lookup bounded by a timeout, None without a
  provider or on any provider error

``GeoIP2GeolocationProvider`` resolves public addresses with a MaxMind
GeoLite2-City database. Without a configured database the function stays
inert (public addresses → None).
"""

import asyncio
import logging
from pathlib import Path

import geoip2.database
import geoip2.errors

from src.domain.protocols import GeolocationProvider, LoggerProtocol
from src.domain.value_objects import GeoLocation
from src.core.ip_address import is_non_routable, parse_ip

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT_SECONDS = 1.0


async def get_geolocation_from_ip(
    ip_address: str | None,
    *,
    provider: GeolocationProvider | None = None,
    timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
) -> GeoLocation | None:
    """Resolve ``ip_address`` to a GeoLocation without ever raising.

    Args:
        ip_address: Client IP (IPv4 or IPv6).
        provider: Lookup provider for public addresses (optional).
        timeout_seconds: Upper bound on the provider call.

    Returns:
        GeoLocation | None: Location, local placeholder, or None.
    """
    ip = parse_ip(ip_address)
    if ip is None:
        return None
    if is_non_routable(ip):
        return GeoLocation.local()
    if provider is None:
        return None
    try:
        async with asyncio.timeout(timeout_seconds):
            return await provider.lookup(str(ip))
    except Exception as e:
        logger.debug("geolocation lookup failed for %s: %r", ip, e)
        return None


class GeoIP2GeolocationProvider:
    """Geolocation provider backed by a MaxMind GeoLite2-City database.

    The database reader is opened lazily on first lookup; lookups run in a
    worker thread because the reader does blocking file I/O.

    Args:
        logger: Logger for load and lookup diagnostics.
        db_path: Path to GeoLite2-City.mmdb.
    """

    def __init__(self, logger: LoggerProtocol, db_path: str) -> None:
        self._logger = logger
        self._db_path = db_path
        self._reader: geoip2.database.Reader | None = None

    def _get_reader(self) -> geoip2.database.Reader:
        if self._reader is None:
            db_file = Path(self._db_path)
            if not db_file.exists():
                raise FileNotFoundError(f"GeoIP database not found: {self._db_path}")
            self._reader = geoip2.database.Reader(str(db_file))
            self._logger.info("GeoIP database loaded", db_path=self._db_path)
        return self._reader

    def _lookup_sync(self, ip_address: str) -> GeoLocation | None:
        try:
            response = self._get_reader().city(ip_address)
        except geoip2.errors.AddressNotFoundError:
            self._logger.debug("IP not found in GeoIP database", ip_address=ip_address)
            return None

        subdivision = response.subdivisions.most_specific
        return GeoLocation(
            country_code=response.country.iso_code or None,
            region=subdivision.name or None,
            city=response.city.name or None,
            latitude=response.location.latitude,
            longitude=response.location.longitude,
        )

    async def lookup(self, ip_address: str) -> GeoLocation | None:
        """Resolve a public IP address.

        Raises:
            FileNotFoundError: If the database file is missing.
            geoip2.errors.GeoIP2Error: On reader failures other than
                "address not found".
        """
        return await asyncio.to_thread(self._lookup_sync, ip_address)

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None


class IPGeolocationResolver:
    """GeolocationProvider applying the full ``get_geolocation_from_ip`` contract.

    This is what the session lifecycle service is given: private ranges get the
    local placeholder, public ranges go to ``provider`` (if any) under a
    timeout, and nothing raises.

    Args:
        provider: Lookup provider for public addresses, or None for the inert
            default.
        timeout_seconds: Upper bound on each provider call.
    """

    def __init__(
        self,
        provider: GeolocationProvider | None = None,
        *,
        timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._timeout_seconds = timeout_seconds

    async def lookup(self, ip_address: str) -> GeoLocation | None:
        return await get_geolocation_from_ip(
            ip_address,
            provider=self._provider,
            timeout_seconds=self._timeout_seconds,
        )
