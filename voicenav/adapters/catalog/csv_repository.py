"""CSV transit catalog adapter.

Loads routes and stops from two CSV files:

- routes.csv: route_id,route_name,description,direction,is_express
- stops.csv: stop_id,stop_name,lat,lon,routes  (routes separated by ';')

Rows without an identifier are skipped. Stops with unparseable
coordinates and routes with an unknown direction are skipped with a
warning.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ...config import CatalogConfig, get_config
from ...domain.errors import CatalogError
from ...domain.models import Direction, Route, Stop, canonical_route_id

_TRUE_VALUES = {"1", "true", "yes", "y"}


@dataclass
class CSVTransitCatalog:
    """Transit catalog that loads from CSV files.

    Data is loaded lazily on first access and cached until
    ``clear_cache`` is called.

    Attributes:
        config: Catalog configuration (paths, file names)
    """

    config: CatalogConfig = field(default_factory=lambda: get_config().catalog)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _routes: Optional[List[Route]] = field(default=None, repr=False)
    _stops: Optional[List[Stop]] = field(default=None, repr=False)
    _index: Dict[str, Route] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def list_routes(self) -> Sequence[Route]:
        """List all routes.

        Raises:
            CatalogError: If the routes file cannot be read.
        """
        if self._routes is None:
            self._routes = self._load_routes()
            self._index = {}
            for route in self._routes:
                self._index.setdefault(route.key, route)
        return list(self._routes)

    def list_stops(self) -> Sequence[Stop]:
        """List all stops.

        Raises:
            CatalogError: If the stops file cannot be read.
        """
        if self._stops is None:
            self._stops = self._load_stops()
        return list(self._stops)

    def get_route(self, identifier: str) -> Optional[Route]:
        self.list_routes()
        return self._index.get(canonical_route_id(identifier))

    def _load_routes(self) -> List[Route]:
        path = self.config.routes_path
        routes: List[Route] = []
        try:
            with path.open(encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    route_id = (row.get("route_id") or "").strip()
                    if not route_id:
                        continue
                    direction_raw = (row.get("direction") or "").strip()
                    try:
                        direction = (
                            Direction.parse(direction_raw)
                            if direction_raw
                            else Direction.BOTH
                        )
                    except ValueError:
                        self._logger.warning(
                            "Skipping route with invalid direction",
                            extra={"route_id": route_id, "direction": direction_raw},
                        )
                        continue
                    routes.append(
                        Route(
                            identifier=route_id,
                            name=(row.get("route_name") or "").strip() or route_id,
                            description=(row.get("description") or "").strip(),
                            direction=direction,
                            is_express=(row.get("is_express") or "").strip().lower()
                            in _TRUE_VALUES,
                        )
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise CatalogError(
                "Failed to load routes",
                file_path=str(path),
                cause=e,
            )

        self._logger.info("Routes loaded", extra={"routes": len(routes)})
        return routes

    def _load_stops(self) -> List[Stop]:
        path = self.config.stops_path
        stops: List[Stop] = []
        try:
            with path.open(encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    stop_id = (row.get("stop_id") or "").strip()
                    if not stop_id:
                        continue
                    try:
                        lat = float((row.get("lat") or "").strip())
                        lon = float((row.get("lon") or "").strip())
                    except ValueError:
                        self._logger.warning(
                            "Skipping stop with invalid coordinates",
                            extra={"stop_id": stop_id},
                        )
                        continue
                    route_ids = tuple(
                        part.strip()
                        for part in (row.get("routes") or "").split(";")
                        if part.strip()
                    )
                    stops.append(
                        Stop(
                            identifier=stop_id,
                            name=(row.get("stop_name") or "").strip() or stop_id,
                            latitude=lat,
                            longitude=lon,
                            route_ids=route_ids,
                        )
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise CatalogError(
                "Failed to load stops",
                file_path=str(path),
                cause=e,
            )

        self._logger.info("Stops loaded", extra={"stops": len(stops)})
        return stops

    def clear_cache(self) -> None:
        """Clear cached routes and stops."""
        self._routes = None
        self._stops = None
        self._index = {}
        self._logger.debug("Catalog cache cleared")
