"""Geolocation value object.

Derived from the client IP for display and risk signals only; never used for
access decisions.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class GeoLocation:
    """Approximate location of a client address.

    Attributes:
        country_code: ISO 3166-1 alpha-2 code, if known.
        region: Region/subdivision name, if known.
        city: City name, if known.
        latitude: Approximate latitude, if known.
        longitude: Approximate longitude, if known.
        is_local: True for the synthesized placeholder returned for private,
            loopback and reserved addresses (no lookup performed).
    """

    country_code: str | None = None
    region: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_local: bool = False

    @classmethod
    def local(cls) -> "GeoLocation":
        """Low-confidence placeholder for non-routable addresses."""
        return cls(region="Local", city="Local", is_local=True)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "GeoLocation | None":
        if not data:
            return None
        return cls(
            country_code=data.get("country_code"),
            region=data.get("region"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            is_local=bool(data.get("is_local", False)),
        )

    def __str__(self) -> str:
        parts = [p for p in (self.city, self.region, self.country_code) if p]
        return ", ".join(parts) if parts else "Unknown"
