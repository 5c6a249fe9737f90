"""Nominatim location provider.

Desktop and kiosk deployments have no GPS; the rider's position is given
as a place name ("KL Sentral, Kuala Lumpur") and geocoded through
OpenStreetMap's Nominatim service. Any failure is reported as an
unavailable fix so proximity falls back instead of failing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim

from ...config import LocationConfig, get_config
from ...domain.models import LocationFix


@dataclass
class NominatimLocationProvider:
    """Location provider that geocodes a place name with Nominatim.

    The fix is looked up once and reused; call ``refresh`` after
    changing ``config.place``.

    Attributes:
        config: Location configuration (place, user agent, timeout)
    """

    config: LocationConfig = field(default_factory=lambda: get_config().location)

    _geolocator: Optional[Nominatim] = field(default=None, repr=False)
    _fix: Optional[LocationFix] = field(default=None, repr=False)
    _resolved: bool = field(default=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geocoder(self) -> Any:
        """Get or initialize the geocoder."""
        if self._geolocator is None:
            self._logger.debug(
                "Initializing Nominatim geocoder",
                extra={
                    "user_agent": self.config.user_agent,
                    "timeout": self.config.timeout_seconds,
                },
            )
            self._geolocator = Nominatim(
                user_agent=self.config.user_agent,
                timeout=self.config.timeout_seconds,
            )
        return self._geolocator

    def get_fix(self) -> Optional[LocationFix]:
        """Geocode the configured place.

        Returns:
            LocationFix for the place, or None if no place is configured
            or the lookup fails.
        """
        if self._resolved:
            return self._fix

        place = (self.config.place or "").strip()
        if not place:
            self._logger.info("No place configured, location unavailable")
            return None

        try:
            location = self._get_geocoder().geocode(place)
        except (GeocoderTimedOut, GeocoderUnavailable, GeocoderServiceError) as e:
            self._logger.warning(
                "Geocode service error",
                extra={"place": place, "error": str(e)},
            )
            return None

        if location is None:
            self._logger.info("Place not found", extra={"place": place})
            self._resolved = True
            self._fix = None
            return None

        try:
            fix = LocationFix(
                latitude=float(location.latitude),
                longitude=float(location.longitude),
                timestamp=time.time(),
            )
        except (TypeError, ValueError) as e:
            self._logger.warning(
                "Geocode returned invalid coordinates",
                extra={"place": place, "error": str(e)},
            )
            return None

        self._logger.debug(
            "Geocode success",
            extra={"place": place, "lat": fix.latitude, "lon": fix.longitude},
        )
        self._fix = fix
        self._resolved = True
        return fix

    def refresh(self) -> None:
        """Forget the cached fix so the next call geocodes again."""
        self._fix = None
        self._resolved = False
