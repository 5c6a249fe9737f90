"""Simulated arrival source.

There is no public real-time feed for these routes yet, so arrivals are
generated: one to three buses, the first two to nine minutes out and the
next ones ten to twenty-four minutes apart. The random source is injected
so that tests and demos can be made deterministic with a seed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List

from ...domain.errors import RouteNotFoundError
from ...domain.models import Arrival, Direction, Reliability
from ...ports.catalog import TransitCatalogPort


@dataclass
class SimulatedArrivalSource:
    """Generates plausible arrivals for catalog routes.

    Attributes:
        catalog: Catalog used to validate route identifiers
        rng: Random source; seed it for reproducible arrivals
    """

    catalog: TransitCatalogPort
    rng: random.Random = field(default_factory=random.Random)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def get_arrivals(self, route_id: str) -> List[Arrival]:
        """Simulate upcoming arrivals for a route.

        Raises:
            RouteNotFoundError: If the route is not in the catalog.
        """
        route = self.catalog.get_route(route_id)
        if route is None:
            raise RouteNotFoundError(f"Route {route_id} not found", route_id=route_id)

        number_of_buses = self.rng.randint(1, 3)
        base_minutes = self.rng.randint(2, 9)

        arrivals: List[Arrival] = []
        for i in range(number_of_buses):
            arrival_minutes = base_minutes + i * self.rng.randint(10, 24)
            platform = self.rng.randint(1, 4)
            bus_number = f"{route.identifier}-{self.rng.randint(1, 99):02d}"

            roll = self.rng.random()
            if roll < 0.1:
                reliability = Reliability.EARLY
            elif roll < 0.25:
                reliability = Reliability.DELAYED
            else:
                reliability = Reliability.ON_TIME

            if route.direction is Direction.BOTH:
                direction = (
                    Direction.INBOUND if self.rng.random() < 0.5 else Direction.OUTBOUND
                )
            else:
                direction = route.direction

            arrivals.append(
                Arrival(
                    route_id=route.identifier,
                    route_name=route.name,
                    arrival_minutes=arrival_minutes,
                    platform=platform,
                    direction=direction,
                    bus_number=bus_number,
                    reliability=reliability,
                )
            )

        arrivals.sort(key=lambda a: a.arrival_minutes)
        self._logger.debug(
            "Arrivals simulated",
            extra={"route_id": route.identifier, "count": len(arrivals)},
        )
        return arrivals
