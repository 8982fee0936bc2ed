"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.device_info import DeviceInfo
from src.domain.value_objects.geo_location import GeoLocation
from src.domain.value_objects.session_policy import SessionPolicy
from src.domain.value_objects.session_principal import SessionPrincipal

__all__ = [
    "DeviceInfo",
    "GeoLocation",
    "SessionPolicy",
    "SessionPrincipal",
]
