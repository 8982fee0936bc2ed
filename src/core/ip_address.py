"""IP address helpers shared by geolocation and IP continuity checks."""

import ipaddress

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

# Prefix lengths treated as "the same network" for continuity checks.
IPV4_NETWORK_PREFIX = 24
IPV6_NETWORK_PREFIX = 64


def parse_ip(value: str | None) -> IPAddress | None:
    """Parse an IPv4/IPv6 string; None for missing or malformed input."""
    if not value or not isinstance(value, str):
        return None
    try:
        return ipaddress.ip_address(value.strip())
    except ValueError:
        return None


def is_non_routable(ip: IPAddress) -> bool:
    """True for private, loopback, reserved, link-local and similar ranges."""
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_reserved
        or ip.is_link_local
        or ip.is_multicast
        or ip.is_unspecified
    )


def is_same_network(first: str | None, second: str | None) -> bool:
    """Check whether two addresses share a /24 (IPv4) or /64 (IPv6) network.

    Unparseable input and mixed address families count as different networks.

    Example:
        >>> is_same_network("203.0.113.7", "203.0.113.200")
        True
        >>> is_same_network("203.0.113.7", "198.51.100.7")
        False
    """
    a = parse_ip(first)
    b = parse_ip(second)
    if a is None or b is None or a.version != b.version:
        return False
    prefix = IPV4_NETWORK_PREFIX if a.version == 4 else IPV6_NETWORK_PREFIX
    network = ipaddress.ip_network(f"{a}/{prefix}", strict=False)
    return b in network
