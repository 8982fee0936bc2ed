"""User agent parsing using the user-agents library.

Turns a raw User-Agent header into the DeviceInfo used as the device-dedup
key and forensic record. Library families are folded into a small stable
vocabulary ("Mobile Safari" and "Safari" are both "Safari") so the device
fingerprint does not change between minor browser variants.
"""

import logging
from functools import lru_cache

from user_agents import parse  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from src.domain.value_objects import DeviceInfo
from src.domain.value_objects.device_info import UNKNOWN

logger = logging.getLogger(__name__)

# Checked in order: Edge and Opera user agents also carry "Chrome"/"Safari".
_BROWSER_FAMILIES = ("Edge", "Opera", "Firefox", "Chrome", "Safari")

_OS_ALIASES = {
    "Mac OS X": "macOS",
    "iOS": "iOS",
    "Android": "Android",
    "Chrome OS": "ChromeOS",
}

_UNRECOGNIZED = {"", "Other"}


def _normalize_browser(family: str | None) -> str:
    if not family or family in _UNRECOGNIZED:
        return UNKNOWN
    for known in _BROWSER_FAMILIES:
        if known in family:
            return known
    return family


def _normalize_os(family: str | None) -> str:
    if not family or family in _UNRECOGNIZED:
        return UNKNOWN
    if family.startswith("Windows"):
        return "Windows"
    return _OS_ALIASES.get(family, family)


def _device_class(ua: UserAgent) -> str:
    if ua.is_tablet:
        return "tablet"
    if ua.is_mobile:
        return "mobile"
    if ua.is_pc:
        return "desktop"
    return UNKNOWN


@lru_cache(maxsize=1024)
def parse_user_agent(user_agent: str) -> DeviceInfo:
    """Parse a User-Agent header into DeviceInfo.

    Deterministic and never raises: empty or unrecognized input yields the
    Unknown tuple.

    Args:
        user_agent: Raw User-Agent header value.

    Returns:
        DeviceInfo: Parsed device, or DeviceInfo.unknown().

    Example:
        >>> parse_user_agent(
        ...     "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
        ...     "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 "
        ...     "Mobile/15E148 Safari/604.1"
        ... )
        DeviceInfo(browser='Safari', os='iOS', device='mobile', is_mobile=True)
    """
    if not isinstance(user_agent, str) or not user_agent.strip():
        return DeviceInfo.unknown()

    try:
        ua: UserAgent = parse(user_agent)
        browser = _normalize_browser(ua.browser.family)
        os_name = _normalize_os(ua.os.family)
        device = _device_class(ua)
    except Exception as e:
        logger.debug("user agent parse failed: %s", e)
        return DeviceInfo.unknown()

    if browser == UNKNOWN and os_name == UNKNOWN:
        return DeviceInfo.unknown()

    return DeviceInfo(
        browser=browser,
        os=os_name,
        device=device,
        is_mobile=device in ("mobile", "tablet"),
    )
