"""Geographic helpers for proximity computations."""

from .haversine import EARTH_RADIUS_KM, haversine_meters

__all__ = ["EARTH_RADIUS_KM", "haversine_meters"]
