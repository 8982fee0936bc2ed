"""Unit tests for user agent parsing."""

import pytest

from src.domain.value_objects import DeviceInfo
from src.infrastructure.context import parse_user_agent
from tests.conftest import CHROME_WINDOWS_UA, SAFARI_IPHONE_UA

FIREFOX_MAC_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:121.0) "
    "Gecko/20100101 Firefox/121.0"
)
EDGE_WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0"
)
CHROME_ANDROID_UA = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
SAFARI_IPAD_UA = (
    "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


@pytest.mark.unit
class TestParseUserAgent:
    def test_chrome_on_windows(self):
        assert parse_user_agent(CHROME_WINDOWS_UA) == DeviceInfo(
            browser="Chrome", os="Windows", device="desktop", is_mobile=False
        )

    def test_safari_on_iphone(self):
        assert parse_user_agent(SAFARI_IPHONE_UA) == DeviceInfo(
            browser="Safari", os="iOS", device="mobile", is_mobile=True
        )

    def test_firefox_on_mac(self):
        info = parse_user_agent(FIREFOX_MAC_UA)

        assert info.browser == "Firefox"
        assert info.os == "macOS"
        assert info.device == "desktop"

    def test_edge_is_not_reported_as_chrome(self):
        assert parse_user_agent(EDGE_WINDOWS_UA).browser == "Edge"

    def test_chrome_on_android(self):
        info = parse_user_agent(CHROME_ANDROID_UA)

        assert info.browser == "Chrome"
        assert info.os == "Android"
        assert info.is_mobile is True

    def test_ipad_is_tablet(self):
        info = parse_user_agent(SAFARI_IPAD_UA)

        assert info.device == "tablet"
        assert info.is_mobile is True

    @pytest.mark.parametrize("user_agent", ["", "   ", "not a browser"])
    def test_unrecognized_is_unknown(self, user_agent):
        assert parse_user_agent(user_agent) == DeviceInfo.unknown()

    def test_deterministic(self):
        assert parse_user_agent(CHROME_WINDOWS_UA).fingerprint() == (
            parse_user_agent(CHROME_WINDOWS_UA).fingerprint()
        )
