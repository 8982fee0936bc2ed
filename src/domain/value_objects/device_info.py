"""Device information value object.

Structured description of the client device, parsed once from the user-agent
string at session creation. Doubles as the device-dedup key.
"""

import hashlib
from dataclasses import asdict, dataclass
from typing import Any

UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceInfo:
    """Parsed client device description.

    Attributes:
        browser: Browser family ("Chrome", "Safari", ...) or "Unknown".
        os: Operating system family ("Windows", "iOS", ...) or "Unknown".
        device: Device class ("desktop", "mobile", "tablet") or "Unknown".
        is_mobile: True for phones and tablets.

    Example:
        >>> info = DeviceInfo(browser="Chrome", os="Windows", device="desktop")
        >>> len(info.fingerprint())
        64
    """

    browser: str = UNKNOWN
    os: str = UNKNOWN
    device: str = UNKNOWN
    is_mobile: bool = False

    @classmethod
    def unknown(cls) -> "DeviceInfo":
        """Device tuple used when the user agent is unrecognized."""
        return cls()

    @property
    def is_unknown(self) -> bool:
        return self == DeviceInfo.unknown()

    def fingerprint(self) -> str:
        """Return the SHA256 dedup key for this device.

        Components are lower-cased and joined with "|" so casing differences
        in stored values do not produce distinct devices.

        Returns:
            str: 64 hex character fingerprint.
        """
        components = [self.browser, self.os, self.device]
        fingerprint_string = "|".join(c.strip().lower() for c in components)
        return hashlib.sha256(fingerprint_string.encode("utf-8")).hexdigest()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "DeviceInfo":
        """Rebuild from a stored mapping; missing keys fall back to Unknown."""
        if not data:
            return cls.unknown()
        return cls(
            browser=str(data.get("browser") or UNKNOWN),
            os=str(data.get("os") or UNKNOWN),
            device=str(data.get("device") or UNKNOWN),
            is_mobile=bool(data.get("is_mobile", False)),
        )

    def __str__(self) -> str:
        return f"{self.browser} on {self.os} ({self.device})"
