"""Proximity resolver - Nearby stops and routes for a location fix.

Stops within the configured radius are ranked by great-circle distance.
Whenever no fix is available, no stop is in range, or the fix is
malformed, a fixed fallback set is returned so that the voice session
has routes to match against. An unreadable catalog yields an empty
fallback set rather than an error.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import ProximityConfig, get_config
from ..domain.errors import CatalogError
from ..domain.models import LocationFix, ProximitySet, Route, Stop, canonical_route_id
from ..geo.haversine import haversine_meters
from ..ports.catalog import TransitCatalogPort
from ..ports.location import LocationProviderPort


@dataclass
class ProximityResolver:
    """Computes the ProximitySet for a location.

    Attributes:
        catalog: Transit reference data
        location_provider: Optional source of fixes for ``resolve_current``
        config: Radius, caps and fallback label
    """

    catalog: TransitCatalogPort
    location_provider: Optional[LocationProviderPort] = None
    config: ProximityConfig = field(default_factory=lambda: get_config().proximity)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve_current(self) -> ProximitySet:
        """Acquire a fix from the location provider and resolve it.

        A provider error is treated exactly like an unavailable fix.
        """
        fix: Optional[LocationFix] = None
        if self.location_provider is not None:
            try:
                fix = self.location_provider.get_fix()
            except Exception as e:
                self._logger.warning(
                    "Location acquisition failed",
                    extra={"error": str(e)},
                )
                fix = None
        return self.resolve(fix)

    def resolve(self, fix: Optional[LocationFix]) -> ProximitySet:
        """Compute nearby stops and routes for a fix.

        Args:
            fix: Current location, or None when unavailable.

        Returns:
            The nearby set, or the fallback set. Never raises.
        """
        if fix is None:
            self._logger.info("No location fix, using fallback routes")
            return self._fallback()

        try:
            nearby = self._nearby_stops(fix)
            stops = tuple(stop for stop, _ in nearby)
            routes = self._routes_for(stops)
        except Exception as e:
            self._logger.warning(
                "Proximity computation failed, using fallback routes",
                extra={"error": str(e)},
            )
            return self._fallback()

        if not nearby:
            self._logger.info(
                "No stops within radius, using fallback routes",
                extra={"radius_meters": self.config.radius_meters},
            )
            return self._fallback()

        distances = tuple(distance for _, distance in nearby)

        proximity = ProximitySet(
            stops=stops,
            routes=routes,
            location_label=stops[0].name,
            is_fallback=False,
            distances_meters=distances,
        )
        self._logger.info(
            "Proximity resolved",
            extra={
                "nearest_stop": stops[0].identifier,
                "stops": len(stops),
                "routes": list(proximity.route_ids),
            },
        )
        return proximity

    def _nearby_stops(self, fix: LocationFix) -> List[Tuple[Stop, float]]:
        lat = float(fix.latitude)
        lon = float(fix.longitude)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Non-finite coordinates: {lat}, {lon}")

        ranked: List[Tuple[Stop, float]] = []
        for stop in self.catalog.list_stops():
            distance = haversine_meters(lat, lon, stop.latitude, stop.longitude)
            if distance <= self.config.radius_meters:
                ranked.append((stop, distance))

        ranked.sort(key=lambda item: item[1])
        return ranked[: self.config.max_stops]

    def _routes_for(self, stops: Tuple[Stop, ...]) -> Tuple[Route, ...]:
        """Union of served routes in first-seen order, catalog routes only."""
        seen = set()
        routes: List[Route] = []
        for stop in stops:
            for route_id in stop.route_ids:
                key = canonical_route_id(route_id)
                if key in seen:
                    continue
                seen.add(key)
                route = self.catalog.get_route(route_id)
                if route is None:
                    self._logger.debug(
                        "Stop serves unknown route",
                        extra={"stop_id": stop.identifier, "route_id": route_id},
                    )
                    continue
                routes.append(route)
        return tuple(routes[: self.config.max_routes])

    def _fallback(self) -> ProximitySet:
        try:
            stops = tuple(self.catalog.list_stops()[: self.config.fallback_stops])
            routes = tuple(self.catalog.list_routes()[: self.config.fallback_routes])
        except CatalogError as e:
            self._logger.warning(
                "Catalog unavailable, fallback set is empty",
                extra={"error": str(e)},
            )
            stops, routes = (), ()
        return ProximitySet(
            stops=stops,
            routes=routes,
            location_label=self.config.fallback_label,
            is_fallback=True,
        )
