"""Arrival port - Live arrival lookup for a route."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Arrival


class ArrivalSourcePort(Protocol):
    """Port for arrival predictions.

    Implementation: adapters/arrivals/simulated.py (SimulatedArrivalSource)
    """

    def get_arrivals(self, route_id: str) -> Sequence[Arrival]:
        """Get upcoming arrivals for a route.

        Args:
            route_id: Route identifier (case-insensitive).

        Returns:
            Arrivals ordered nearest first; may be empty.

        Raises:
            RouteNotFoundError: If the route is unknown.
        """
        ...
