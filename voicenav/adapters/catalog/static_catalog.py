"""In-memory transit catalog with Kuala Lumpur bus data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ...domain.models import Direction, Route, Stop, canonical_route_id

KL_BUS_ROUTES: tuple[Route, ...] = (
    Route("581", "581", "KL Sentral ↔ Gombak", Direction.BOTH, False),
    Route("T581", "T581", "Express KL Sentral ↔ Gombak", Direction.BOTH, True),
    Route("U84", "U84", "University Malaya ↔ KL Sentral", Direction.BOTH, False),
    Route("B101", "B101", "City Center Loop", Direction.CIRCULAR, False),
    Route("400", "400", "Klang ↔ KL Sentral", Direction.BOTH, False),
    Route("U83", "U83", "University Putra ↔ LRT Serdang", Direction.BOTH, False),
    Route("500", "500", "Shah Alam ↔ KL Sentral", Direction.BOTH, False),
    Route("T500", "T500", "Express Shah Alam ↔ KL Sentral", Direction.BOTH, True),
)

# T400 at KLCC is served but not in the route list; proximity drops it.
KL_BUS_STOPS: tuple[Stop, ...] = (
    Stop(
        "KLS001",
        "KL Sentral",
        3.1347,
        101.6841,
        ("581", "T581", "U84", "B101", "400", "500", "T500"),
    ),
    Stop("BB001", "Bukit Bintang", 3.1478, 101.7108, ("B101", "400", "500")),
    Stop("KLCC001", "KLCC", 3.1570, 101.7116, ("B101", "400", "T400")),
    Stop("GM001", "Gombak Terminal", 3.2588, 101.6539, ("581", "T581")),
)


@dataclass
class StaticTransitCatalog:
    """Transit catalog backed by in-memory tuples.

    Attributes:
        routes: Known routes, in catalog order
        stops: Known stops, in catalog order
    """

    routes: Sequence[Route] = KL_BUS_ROUTES
    stops: Sequence[Stop] = KL_BUS_STOPS

    _index: Dict[str, Route] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.routes = tuple(self.routes)
        self.stops = tuple(self.stops)
        self._index = {}
        for route in self.routes:
            self._index.setdefault(route.key, route)

    def list_routes(self) -> Sequence[Route]:
        return self.routes

    def list_stops(self) -> Sequence[Stop]:
        return self.stops

    def get_route(self, identifier: str) -> Optional[Route]:
        return self._index.get(canonical_route_id(identifier))
