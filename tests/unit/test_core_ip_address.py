"""Unit tests for IP address helpers."""

import pytest

from src.core.ip_address import is_non_routable, is_same_network, parse_ip


@pytest.mark.unit
class TestParseIp:
    def test_parses_ipv4_and_ipv6(self):
        assert str(parse_ip("8.8.8.8")) == "8.8.8.8"
        assert str(parse_ip(" 2001:4860:4860::8888 ")) == "2001:4860:4860::8888"

    @pytest.mark.parametrize("value", [None, "", "not-an-ip", "256.1.1.1", "1.2.3"])
    def test_malformed_is_none(self, value):
        assert parse_ip(value) is None


@pytest.mark.unit
class TestIsNonRoutable:
    @pytest.mark.parametrize(
        "value",
        ["10.0.0.1", "192.168.1.1", "172.16.0.1", "127.0.0.1", "::1", "fe80::1"],
    )
    def test_private_and_loopback(self, value):
        assert is_non_routable(parse_ip(value)) is True

    @pytest.mark.parametrize("value", ["8.8.8.8", "1.1.1.1", "2001:4860:4860::8888"])
    def test_public(self, value):
        assert is_non_routable(parse_ip(value)) is False


@pytest.mark.unit
class TestIsSameNetwork:
    def test_same_ipv4_slash_24(self):
        assert is_same_network("8.8.8.8", "8.8.8.200") is True

    def test_different_ipv4_networks(self):
        assert is_same_network("8.8.8.8", "1.1.1.1") is False

    def test_same_ipv6_slash_64(self):
        assert is_same_network("2001:4860:4860::8888", "2001:4860:4860::8844") is True

    def test_different_ipv6_networks(self):
        assert is_same_network("2001:4860:4860::8888", "2001:4860:4861::1") is False

    def test_mixed_families_are_different(self):
        assert is_same_network("8.8.8.8", "2001:4860:4860::8888") is False

    def test_unparseable_is_different(self):
        assert is_same_network("8.8.8.8", "garbage") is False
        assert is_same_network(None, "8.8.8.8") is False
