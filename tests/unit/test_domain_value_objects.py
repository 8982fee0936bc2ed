"""Unit tests for DeviceInfo, GeoLocation and SessionPolicy."""

from dataclasses import FrozenInstanceError

import pytest

from src.core.config import Settings
from src.domain.value_objects import DeviceInfo, GeoLocation, SessionPolicy
from tests.conftest import chrome_on_windows, safari_on_iphone


@pytest.mark.unit
class TestDeviceInfo:
    def test_fingerprint_is_sha256_hex(self):
        fingerprint = chrome_on_windows().fingerprint()

        assert len(fingerprint) == 64
        int(fingerprint, 16)

    def test_fingerprint_is_deterministic(self):
        assert chrome_on_windows().fingerprint() == chrome_on_windows().fingerprint()

    def test_fingerprint_ignores_case(self):
        lower = DeviceInfo(browser="chrome", os="windows", device="desktop")

        assert lower.fingerprint() == chrome_on_windows().fingerprint()

    def test_different_devices_have_different_fingerprints(self):
        assert chrome_on_windows().fingerprint() != safari_on_iphone().fingerprint()

    def test_unknown(self):
        unknown = DeviceInfo.unknown()

        assert unknown.browser == "Unknown"
        assert unknown.os == "Unknown"
        assert unknown.device == "Unknown"
        assert unknown.is_unknown is True
        assert chrome_on_windows().is_unknown is False

    def test_dict_round_trip(self):
        info = safari_on_iphone()

        assert DeviceInfo.from_dict(info.to_dict()) == info

    def test_from_empty_dict_is_unknown(self):
        assert DeviceInfo.from_dict(None) == DeviceInfo.unknown()
        assert DeviceInfo.from_dict({}) == DeviceInfo.unknown()

    def test_str(self):
        assert str(chrome_on_windows()) == "Chrome on Windows (desktop)"

    def test_is_immutable(self):
        with pytest.raises(FrozenInstanceError):
            chrome_on_windows().browser = "Firefox"  # type: ignore[misc]


@pytest.mark.unit
class TestGeoLocation:
    def test_local_placeholder(self):
        local = GeoLocation.local()

        assert local.is_local is True
        assert local.city == "Local"
        assert local.country_code is None

    def test_from_empty_dict_is_none(self):
        assert GeoLocation.from_dict(None) is None

    def test_str_joins_known_parts(self):
        location = GeoLocation(country_code="US", region="California", city="Fresno")

        assert str(location) == "Fresno, California, US"
        assert str(GeoLocation()) == "Unknown"


@pytest.mark.unit
class TestSessionPolicy:
    def test_defaults(self):
        policy = SessionPolicy()

        assert policy.max_concurrent_sessions_per_device == 1
        assert policy.max_concurrent_sessions_total is None
        assert policy.max_idle_minutes == 30
        assert policy.max_session_hours == 8

    @pytest.mark.parametrize(
        "field",
        [
            "max_concurrent_sessions_per_device",
            "max_concurrent_sessions_total",
            "max_idle_minutes",
            "max_session_hours",
        ],
    )
    def test_rejects_non_positive_limits(self, field):
        with pytest.raises(ValueError, match=field):
            SessionPolicy(**{field: 0})

    def test_from_settings(self):
        settings = Settings(
            session_max_concurrent_per_device=2,
            session_max_concurrent_total=5,
            session_max_idle_minutes=15,
            session_max_hours=4,
        )

        policy = SessionPolicy.defaults(settings)

        assert policy == SessionPolicy(
            max_concurrent_sessions_per_device=2,
            max_concurrent_sessions_total=5,
            max_idle_minutes=15,
            max_session_hours=4,
        )

    def test_tightened_only_shortens(self):
        policy = SessionPolicy(max_idle_minutes=30, max_session_hours=8)

        shorter = policy.tightened(idle_minutes=10, session_hours=24)

        assert shorter.max_idle_minutes == 10
        assert shorter.max_session_hours == 8

    def test_tightened_without_overrides_is_unchanged(self):
        policy = SessionPolicy(max_idle_minutes=30)

        assert policy.tightened() == policy
